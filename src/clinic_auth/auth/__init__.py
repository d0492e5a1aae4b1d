"""
Authentication module for the clinic system.

This module provides authentication and authorization functionality including:
- User registration with a role-specific profile (doctor, nurse, patient)
- Password hashing and login
- Signed session tokens carried in an HTTP-only cookie
- Request dependencies that resolve a session to a user
"""
