"""
Back-fill branding_settings.static_fallback_ref from the legacy fallback rules
(tenant id 555, "grace" in brand code or name). Once every eligible company carries
a ref, LEGACY_FALLBACK_MATCHING=0 can be set.

Usage:
  cd backend
  python3 scripts/seed_static_fallback_refs.py [--dry-run]
"""
from __future__ import annotations

from pathlib import Path
import sys

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from db.session import SessionLocal, init_db
from fallback_layouts import backfill_static_fallback_refs
from layout_store import SqlLayoutStore


def main() -> None:
    dry_run = "--dry-run" in sys.argv[1:]
    init_db()
    db = SessionLocal()
    try:
        store = SqlLayoutStore(db, actor_id="seed-script")
        updated = backfill_static_fallback_refs(store, dry_run=dry_run)
    finally:
        db.close()
    for company_id, family in updated:
        print(f"[seed] company={company_id} static_fallback_ref={family}{' (dry run)' if dry_run else ''}")
    print(f"[seed] complete. {len(updated)} compan{'y' if len(updated) == 1 else 'ies'} matched.")


if __name__ == "__main__":
    main()
