"""supamarker - publish markdown posts to Supabase.

Uploads markdown files to a Supabase storage bucket and keeps a posts
table with one metadata row per post, keyed by slug.
"""

__version__ = "0.1.0"
