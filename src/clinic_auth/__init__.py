"""Clinic Auth API - credential and session service for doctors, nurses and patients."""
