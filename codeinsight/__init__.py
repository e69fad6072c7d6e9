"""CodeInsight: GitHub analytics API."""
