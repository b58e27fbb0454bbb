"""Storefront: catalogue, panier, checkout Stripe et commandes (FastAPI + Supabase)."""
