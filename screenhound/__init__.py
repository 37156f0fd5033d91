"""
Screenhound backend package.

This package provides a FastAPI application that receives SMS/MMS webhooks,
stores dog photo and trivia submissions, and serves moderation and display
endpoints for the Screenhound frontend.
"""
