#!/usr/bin/env python3
"""Check that the knowledge card schema exists in Supabase.

Usage:
    python run_supabase_migration.py

The Supabase client cannot run DDL, so when the table or the
match_knowledge_cards function is missing this prints the SQL to paste into
the Supabase SQL editor.
"""
import sys
from pathlib import Path

from kbchat.core.config import get_settings
from kbchat.db.knowledge_cards import MATCH_RPC, TABLE
from kbchat.db.supabase_client import get_supabase

MIGRATION_FILE = Path(__file__).parent / "migrations" / "0001_knowledge_cards.sql"


def run_migration():
    settings = get_settings()
    supabase = get_supabase(settings)

    try:
        print(f"🔍 Checking {TABLE} table...")
        supabase.table(TABLE).select("id").limit(1).execute()
        print("✅ Table exists")

        print(f"🔍 Checking {MATCH_RPC} function...")
        supabase.rpc(
            MATCH_RPC,
            {
                "query_embedding": [0.0] * settings.EMBEDDING_DIM,
                "match_threshold": 1.0,
                "match_count": 1,
            },
        ).execute()
        print("✅ Function exists")

    except Exception as e:
        print(f"❌ Schema check failed: {e}")
        print("💡 Run this SQL in your Supabase SQL editor:\n")
        print(MIGRATION_FILE.read_text())
        sys.exit(1)


if __name__ == "__main__":
    run_migration()
