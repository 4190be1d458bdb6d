# Supabase Auth
# This module uses Supabase's built-in authentication system as the identity provider.
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation

"""
The subject id of an authenticated session (auth.users.id) is what the
public.users table stores as external_id. User rows are created and removed
by the identity webhook (see fragfeed.modules.webhooks), not by this module.

The username chosen at registration is kept in user_metadata.username so the
webhook can copy it onto the users row.
"""
