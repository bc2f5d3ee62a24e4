# Supabase table: todos
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

todos:
- id: bigint (primary key, identity)
- created_at: timestamptz (default: now())
- title: text (not null)
- description: text (nullable)
- status: text (not null, default: 'en_cours') - values: en_cours, termine
- user_id: uuid (foreign key to auth.users.id, not null)

Row level security restricts select/insert/update/delete to rows where
user_id = auth.uid(). The client still filters every query on user_id.
"""
