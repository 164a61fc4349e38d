"""
Alternative Credit Engine - Transaction-based credit scoring

A FastAPI-based microservice that ingests bank transactions, checks
whether a user's data supports scoring, computes a 300-850 credit score
from behavioral factors and explains the result.
"""

__version__ = "0.1.0"
