"""
Mind Mate - workplace wellness backend.

Mood tracking, stress evaluation, recovery challenges and AI-assisted
recommendations, exposed over FastAPI.
"""
