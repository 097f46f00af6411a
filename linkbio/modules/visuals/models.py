# Supabase table: visual_settings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

visual_settings:
- id: uuid (primary key)
- user_id: uuid (unique, not null, references auth.users.id on delete cascade)
- background_type: text (not null, default: 'gradient') - values: gradient, image, video
- background_value: text (nullable) - gradient CSS or media URL
- background_audio_url: text (nullable)
- audio_autoplay: boolean (default: false)
- audio_loop: boolean (default: true)
- effect_snowfall: boolean (default: false)
- effect_particles: boolean (default: false)
- effect_glow: boolean (default: true)
- effect_glitch: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

One row per profile, created at registration and updated in place afterwards.
"""
