"""
Services - business logic over the MongoDB collections.

- UserService: registration, login, account lookups
- ProfileService: profiles and their experience/education entries
- PostService: posts, likes and comments
"""
