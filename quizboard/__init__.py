"""
Quizboard - leaderboard and ranking core for the kids' arithmetic quiz.
"""

__version__ = "0.1.0"
