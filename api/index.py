"""Flask app for POST /api/verify-order — deployed on Vercel."""

from __future__ import annotations

import logging
import os
import sys

# Add src/ to path so we can import verifier.* modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv

load_dotenv()  # for local development; Vercel uses env vars from dashboard

from verifier.web import create_app

logging.basicConfig(level=logging.INFO)

app = create_app()
