#!/usr/bin/env python3
"""
Mint a signed bearer token for calling the admin product routes.

    python scripts/generate_token.py --role admin
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from insurance_api.core.config import config
from insurance_api.services.token import TokenService


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a JWT for the Insurance Product Service")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--role", default="admin")
    parser.add_argument("--sub", default="12345")
    parser.add_argument(
        "--expires-in",
        type=int,
        default=config.jwt_expiration,
        help="Token lifetime in seconds (default: one day)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> str:
    args = parse_args(argv)
    service = TokenService(config.jwt_secret, config.jwt_algorithm, config.jwt_expiration)
    token = service.issue(args.username, args.role, args.sub, expires_in=args.expires_in)
    print(token)
    return token


if __name__ == "__main__":
    main()
