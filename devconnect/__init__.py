"""
DevConnect
A social network backend for developers.

Architecture:
- MongoDB: users, profiles (with experience/education), posts (with likes/comments)
- JWT: stateless auth tokens, 100 hour lifetime
- bcrypt: password hashes
"""

__version__ = "1.0.0"
