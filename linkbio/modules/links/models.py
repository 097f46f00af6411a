# Supabase table: links
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

links:
- id: uuid (primary key)
- user_id: uuid (not null, references auth.users.id on delete cascade)
- title: text (not null)
- url: text (not null) - final target, already built from the platform template
- icon: text (default: 'link') - platform tag, see smart_links.Platform
- sort_order: integer (default: 0) - ascending display order
- is_enabled: boolean (default: true) - hidden from the public page when false
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
