"""
Служебные команды.

    rideshare-admin promote <username>
    rideshare-admin list-admins

Первый админ назначается здесь (или через ADMIN_USERNAMES при старте);
через HTTP API повысить пользователя может только уже существующий админ.
"""
from __future__ import annotations

import argparse
import logging
import sys

from .db import SessionLocal, init_db
from .services.users import get_admin_users, get_user_by_username, promote_user_to_admin

logger = logging.getLogger(__name__)


def _promote(args) -> int:
    db = SessionLocal()
    try:
        user = get_user_by_username(db, args.username)
        if not user:
            print(f"user not found: {args.username}", file=sys.stderr)
            return 1
        promote_user_to_admin(db, user.id)
        print(f"{user.username} is now admin")
        return 0
    finally:
        db.close()


def _list_admins(args) -> int:
    db = SessionLocal()
    try:
        for u in get_admin_users(db):
            print(f"{u.id}\t{u.username}\t{u.email}")
        return 0
    finally:
        db.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rideshare-admin")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("promote", help="grant admin role to an existing user")
    p.add_argument("username")
    p.set_defaults(func=_promote)

    p = sub.add_parser("list-admins", help="print admin accounts")
    p.set_defaults(func=_list_admins)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    init_db()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
