"""Storefront search and shopping assistant backend."""
