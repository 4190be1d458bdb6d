# Supabase tables: upvotes, downvotes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure (identical for upvotes and downvotes):

upvotes / downvotes:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, on delete cascade, not null)
- user_id: uuid (foreign key to users.id, on delete cascade, not null)
- created_at: timestamp (default: now())
- unique constraint on (post_id, user_id)

A row's existence is the vote. Totals live in counters under
upvote:<post_id> and downvote:<post_id>.
"""

"""
Expected Postgres function (called through PostgREST rpc):

create or replace function toggle_vote(p_post_id uuid, p_user_id uuid, p_direction text)
returns boolean
language plpgsql
as $$
declare
  opposite text := case p_direction when 'upvote' then 'downvote' else 'upvote' end;
  removed integer;
begin
  if p_direction not in ('upvote', 'downvote') then
    raise exception 'unknown vote direction %', p_direction;
  end if;

  execute format('delete from %I where post_id = $1 and user_id = $2', p_direction || 's')
    using p_post_id, p_user_id;
  get diagnostics removed = row_count;
  if removed > 0 then
    perform adjust_counter(p_direction || ':' || p_post_id, -1);
    return false;
  end if;

  execute format('delete from %I where post_id = $1 and user_id = $2', opposite || 's')
    using p_post_id, p_user_id;
  get diagnostics removed = row_count;
  if removed > 0 then
    perform adjust_counter(opposite || ':' || p_post_id, -1);
  end if;

  execute format('insert into %I (post_id, user_id) values ($1, $2)', p_direction || 's')
    using p_post_id, p_user_id;
  perform adjust_counter(p_direction || ':' || p_post_id, 1);
  return true;
end;
$$;

Vote rows and both counters change in one transaction. Returns true when the
vote is present afterwards.
"""
