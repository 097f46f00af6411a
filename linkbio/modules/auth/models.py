# Supabase Auth
# Identities live in Supabase's auth.users table; no custom tables here.
# Every other table is keyed by auth.users.id through a user_id column.

"""
Supabase Auth provides:
- auth.sign_up() - Create a credential identity (registration step 3)
- auth.sign_in_with_password() - Authenticate users
- auth.refresh_session() - Rotate an access token using a refresh token
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.admin.delete_user() - Remove an identity (service role key only);
  used to clean up after a registration that failed half way
"""
