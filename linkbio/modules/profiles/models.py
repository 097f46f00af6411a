# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key)
- user_id: uuid (unique, not null, references auth.users.id on delete cascade)
- username: text (unique, not null) - lowercase, [a-z0-9_]+
- display_name: text (nullable)
- bio: text (nullable, check: char_length(bio) <= 200)
- avatar_url: text (nullable)
- is_admin: boolean (not null, default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Only the registration flow inserts rows here. The unique index on username
is the real guard against two accounts claiming the same name.
"""
