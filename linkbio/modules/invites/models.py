# Supabase table: invite_codes, function: use_invite_code
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

invite_codes:
- id: uuid (primary key)
- code: text (unique, not null) - matched exactly, case-sensitive
- uses_left: integer (not null, default: 1, check: uses_left >= 0)
- max_uses: integer (not null, default: 1, check: max_uses >= 1)
- created_by: uuid (nullable, references auth.users.id)
- used_by: uuid (nullable) - last user who redeemed the code
- used_at: timestamp (nullable) - last redemption time
- created_at: timestamp (default: now())
- check constraint: uses_left <= max_uses

use_invite_code(invite_code text, user_uuid uuid) returns boolean:
Guarded decrement; the only way uses_left ever changes.

    create or replace function public.use_invite_code(invite_code text, user_uuid uuid)
    returns boolean language plpgsql security definer as $$
    begin
      update public.invite_codes
         set uses_left = uses_left - 1,
             used_by = user_uuid,
             used_at = now()
       where code = invite_code
         and uses_left > 0;
      return found;
    end;
    $$;
"""
