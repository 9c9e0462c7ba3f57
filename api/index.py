"""
Vercel serverless function - exposes the Flask app built by the factory.
Configuration comes from the environment (DATABASE_URL, JWT_SECRET_KEY, ...).
"""
from diaries import create_app

app = create_app()
