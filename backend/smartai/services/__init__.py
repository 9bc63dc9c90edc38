# Services package init
"""
SmartAI Backend - Services Layer
================================

What:  Everything between the routes (HTTP) and MongoDB.

Service Inventory:
    - OwnedCollectionService (base.py): owner-scoped CRUD + error translation
    - QuizService, FolderService, BookmarkService, StudentService,
      StudentQuizService: one per collection, adding existence checks and
      delete cascades
    - EmailService: SMTP connection check for the debug endpoint

Each module exposes a singleton (`quiz_service`, ...); services hold no
per-request state.
"""
