# Supabase tables: subreddits, subreddit_memberships
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

subreddits:
- id: uuid (primary key)
- name: text (unique, not null) - 3 to 21 chars of [A-Za-z0-9_]
- description: text (nullable)
- author_id: uuid (foreign key to users.id, not null) - owner/creator
- guidelines: text[] (not null, default: '{}')
- banner_image: text (nullable) - media storage id
- logo_image: text (nullable) - media storage id
- created_at: timestamp (default: now())

subreddit_memberships:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, on delete cascade, not null)
- subreddit_id: uuid (foreign key to subreddits.id, on delete cascade, not null)
- joined_at: timestamp (default: now())
- unique constraint on (user_id, subreddit_id)
"""

"""
Expected Postgres function (called through PostgREST rpc):

create or replace function create_subreddit(
  p_name text, p_description text, p_author_id uuid, p_guidelines text[]
)
returns uuid
language plpgsql
as $$
declare
  new_id uuid;
begin
  insert into subreddits (name, description, author_id, guidelines)
  values (p_name, p_description, p_author_id, p_guidelines)
  returning id into new_id;

  insert into subreddit_memberships (user_id, subreddit_id)
  values (p_author_id, new_id);

  return new_id;
end;
$$;

The community and its creator's membership commit together; a taken name
surfaces as unique_violation (23505).
"""
