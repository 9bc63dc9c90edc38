"""
SmartAI Backend - Application Package
=====================================

What: REST API for quizzes, folders, bookmarks, students and student quiz
      attempts, stored in MongoDB.
Who:  Imported by uvicorn (`smartai.main:app`), by the serverless entry point
      (`api/index.py`) and by the test suite.

Layers:
    ┌─────────────────────────────────────┐
    │     Middleware (CORS, IDs, logs)    │  ← cross-cutting HTTP concerns
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Services (owner-scoped CRUD)  │  ← queries, existence checks
    ├─────────────────────────────────────┤
    │      Schemas (Pydantic contracts)   │
    ├─────────────────────────────────────┤
    │   Database (lazy MongoDB connector) │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
