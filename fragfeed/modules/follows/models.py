# Supabase table: follows
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

follows:
- id: uuid (primary key)
- follower_id: uuid (foreign key to users.id, on delete cascade, not null)
- following_id: uuid (foreign key to users.id, on delete cascade, not null)
- created_at: timestamp (default: now())
- unique constraint on (follower_id, following_id)

Indexes:
- (follower_id, created_at desc)
- (following_id, created_at desc)
"""

"""
Expected Postgres function (called through PostgREST rpc):

create or replace function follow_user(
  p_follower_id uuid, p_following_id uuid, p_title text, p_message text
)
returns uuid
language plpgsql
as $$
declare
  new_id uuid;
begin
  insert into follows (follower_id, following_id)
  values (p_follower_id, p_following_id)
  returning id into new_id;

  insert into notifications (user_id, type, title, message, from_user_id)
  values (p_following_id, 'new_follower', p_title, p_message, p_follower_id);

  return new_id;
end;
$$;

The follow row and the new_follower notification commit together.
"""
