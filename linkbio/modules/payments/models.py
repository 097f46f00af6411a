# Supabase table: payment_logs
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

payment_logs:
- id: uuid (primary key)
- user_id: uuid (not null, references auth.users.id)
- badge_id: uuid (nullable, foreign key to badges.id)
- discord_username: text (nullable) - where the purchase is arranged
- amount: numeric (nullable)
- status: text (default: 'pending') - values: pending, confirmed, rejected
- notes: text (nullable)
- confirmed_at: timestamp (nullable)
- confirmed_by: uuid (nullable)
- created_at: timestamp (default: now())

Rows are only ever inserted with the default status; confirmation happens
outside this service.
"""
