"""reading_quiz_server — FastAPI REST API for the reading quiz SDK.

Exposes QuizSessionService as an HTTP API: session creation, question
retrieval, answer submission, and result summaries.
"""
