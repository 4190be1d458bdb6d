# Supabase table: saved_posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

saved_posts:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, on delete cascade, not null)
- post_id: uuid (foreign key to posts.id, on delete cascade, not null)
- saved_at: timestamp (default: now())
- unique constraint on (user_id, post_id)

Indexes:
- (user_id, saved_at desc)
"""
