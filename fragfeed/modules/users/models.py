# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, default: gen_random_uuid())
- username: text (not null, default: '')
- external_id: text (unique, not null) - auth.users.id of the identity
- profile_picture: text (nullable) - media storage id
- banner_image: text (nullable) - media storage id
- bio: text (nullable)
- location: text (nullable)
- website: text (nullable)
- steam_profile: jsonb (nullable) - {steam_id, username, profile_url, avatar_url, connected_at}
- riot_profile: jsonb (nullable) - {riot_id, game_name, tag_line, connected_at}
- epic_profile: jsonb (nullable) - {epic_id, display_name, connected_at}
- ubisoft_profile: jsonb (nullable) - {ubisoft_id, username, connected_at}
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Indexes:
- unique (external_id)
- (username); trigram index on username for search
"""
