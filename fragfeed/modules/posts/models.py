# Supabase table: posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

posts:
- id: uuid (primary key)
- subject: text (not null)
- body: text (not null)
- subreddit_id: uuid (foreign key to subreddits.id, on delete cascade, not null)
- author_id: uuid (foreign key to users.id, on delete cascade, not null)
- image: text (nullable) - media storage id
- created_at: timestamp (default: now())

Indexes:
- (subreddit_id, created_at desc)
- (author_id, created_at desc)
- trigram index on subject for search

Per-author post totals live in counters under post_count:<author_id>.
"""

"""
Expected Postgres functions (called through PostgREST rpc):

create or replace function create_post(
  p_subject text, p_body text, p_subreddit_id uuid, p_author_id uuid, p_image text
)
returns uuid
language plpgsql
as $$
declare
  new_id uuid;
begin
  insert into posts (subject, body, subreddit_id, author_id, image)
  values (p_subject, p_body, p_subreddit_id, p_author_id, p_image)
  returning id into new_id;

  perform adjust_counter('post_count:' || p_author_id, 1);
  return new_id;
end;
$$;

create or replace function delete_post(p_post_id uuid)
returns boolean
language plpgsql
as $$
declare
  old_author uuid;
begin
  delete from posts where id = p_post_id returning author_id into old_author;
  if old_author is null then
    return false;
  end if;

  perform adjust_counter('post_count:' || old_author, -1);
  return true;
end;
$$;
"""
