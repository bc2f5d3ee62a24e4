# Supabase Auth and Storage
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (full_name kept in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_session() - Current session, if any
- auth.on_auth_state_change() - Session change notifications
- auth.update_user() - Change email, password or user_metadata
- auth.sign_out() - Logout users

Avatars live in the public storage bucket "avatars" under <user_id>/avatar.<ext>;
their public URL is kept in user_metadata.avatar_url.
"""
