# Supabase table: notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

notifications:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, on delete cascade, not null) - addressee
- type: text (not null) - new_post, follower_post, new_follower
- title: text (not null)
- message: text (not null)
- post_id: uuid (foreign key to posts.id, on delete cascade, nullable)
- subreddit_id: uuid (foreign key to subreddits.id, on delete cascade, nullable)
- from_user_id: uuid (foreign key to users.id, on delete set null, nullable)
- read: boolean (not null, default: false)
- created_at: timestamp (default: now())

Indexes:
- (user_id, created_at desc)
- (user_id, read)
"""
