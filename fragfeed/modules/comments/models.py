# Supabase table: comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

comments:
- id: uuid (primary key)
- content: text (not null)
- post_id: uuid (foreign key to posts.id, on delete cascade, not null)
- author_id: uuid (foreign key to users.id, on delete cascade, not null)
- created_at: timestamp (default: now())

Indexes:
- (post_id, created_at)

Per-post comment totals live in counters under comment_count:<post_id>.
"""

"""
Expected Postgres functions (called through PostgREST rpc):

create or replace function create_comment(p_content text, p_post_id uuid, p_author_id uuid)
returns uuid
language plpgsql
as $$
declare
  new_id uuid;
begin
  insert into comments (content, post_id, author_id)
  values (p_content, p_post_id, p_author_id)
  returning id into new_id;

  perform adjust_counter('comment_count:' || p_post_id, 1);
  return new_id;
end;
$$;

create or replace function delete_comment(p_comment_id uuid)
returns boolean
language plpgsql
as $$
declare
  old_post uuid;
begin
  delete from comments where id = p_comment_id returning post_id into old_post;
  if old_post is null then
    return false;
  end if;

  perform adjust_counter('comment_count:' || old_post, -1);
  return true;
end;
$$;
"""
