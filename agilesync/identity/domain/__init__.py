"""
Identity Domain Layer
Users, organizations, memberships and their value objects
"""
