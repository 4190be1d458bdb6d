# Supabase table: counters, function: adjust_counter
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

counters:
- key: text (primary key) - e.g. post_count:<user_id>, comment_count:<post_id>
- value: integer (not null, default: 0)

Expected Postgres function (called through PostgREST rpc):

create or replace function adjust_counter(counter_key text, delta integer)
returns integer
language sql
as $$
  insert into counters (key, value)
  values (counter_key, greatest(delta, 0))
  on conflict (key) do update
    set value = greatest(counters.value + delta, 0)
  returning value;
$$;

The upsert runs as a single statement, so concurrent increments on the same
key serialize on the row lock instead of losing updates.
"""
