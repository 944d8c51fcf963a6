#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the MongoDB connection and the token setup are working.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from devconnect.db.mongodb import test_mongo_connection, init_mongo_indexes
from devconnect.core.auth import get_token_service
from devconnect.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("DEVCONNECT - CONNECTION TEST")
    print("=" * 50)

    # Test MongoDB
    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
        init_mongo_indexes()
        print("    ✅ Indexes: CREATED")
    else:
        print("    ❌ MongoDB: FAILED")

    # Test token signing
    print("\n[2] Testing token signing...")
    if settings.jwt_secret_key == "change-this-secret":
        print("    ⚠️  JWT secret is the default value (set JWT_SECRET_KEY)")
    tokens = get_token_service()
    token = tokens.issue("000000000000000000000000")
    if tokens.verify(token) == "000000000000000000000000":
        print("    ✅ Tokens: SIGN/VERIFY OK")
    else:
        print("    ❌ Tokens: FAILED")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
