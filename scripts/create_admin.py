"""Create (or reset) an Admin account.

Usage: python scripts/create_admin.py admin@example.com 'Admin1234!x' --first Admin --last User
"""

from __future__ import annotations

import argparse
import importlib
import sys

from config import get_settings_module

from dealership.common.validators import require_email, require_strong_password
from dealership.core.enums import AccountType
from dealership.core.exceptions import ValidationError
from dealership.database.bootstrap import upsert_account


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an Admin account")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first", default="Admin")
    parser.add_argument("--last", default="User")
    args = parser.parse_args(argv)

    try:
        email = require_email(args.email)
        password = require_strong_password(args.password)
    except ValidationError as e:
        print(f"Error creating Admin account: {e}", file=sys.stderr)
        return 1

    settings = importlib.import_module(get_settings_module())
    upsert_account(
        dict(settings.DB_CONFIG),
        firstname=args.first,
        lastname=args.last,
        email=email,
        password=password,
        account_type=AccountType.ADMIN.value,
    )
    print(f"OK: Admin account ready -> {email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
