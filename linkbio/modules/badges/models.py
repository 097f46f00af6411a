# Supabase tables: badges, user_badges
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

badges:
- id: uuid (primary key)
- name: text (not null)
- icon: text (not null)
- tooltip: text (nullable)
- is_premium: boolean (default: false) - bought externally, assigned by an admin
- discord_buy_link: text (nullable) - where premium badges are sold
- created_at: timestamp (default: now())

user_badges:
- id: uuid (primary key)
- user_id: uuid (not null, references auth.users.id on delete cascade)
- badge_id: uuid (not null, foreign key to badges.id)
- is_displayed: boolean (default: true)
- acquired_at: timestamp (default: now())
- unique constraint on (user_id, badge_id)
"""
