"""Mint a bearer token for local testing.

Usage:
    python create_token.py admin@rt05.example adminSistem [days]
"""
import sys

from warga_api.app.core.security import create_access_token

if len(sys.argv) < 3:
    sys.exit(__doc__)

subject, role = sys.argv[1], sys.argv[2]
days = int(sys.argv[3]) if len(sys.argv) > 3 else 365
print(create_access_token({"sub": subject, "role": role}, expires_delta=days * 24 * 60 * 60))
