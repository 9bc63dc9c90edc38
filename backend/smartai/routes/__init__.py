# Routes package init
"""
SmartAI Backend - API Routes Package
====================================

Route Inventory:
    - root.py:          GET  /                            (API banner)
    - health.py:        GET  /api/health                  (liveness probe)
    - auth.py:          GET  /api/auth/me, POST /api/auth/logout
    - quiz.py:          /api/quiz                         (quizzes CRUD)
    - folders.py:       /api/folders                      (folders CRUD + contents)
    - bookmarks.py:     /api/bookmarks                    (bookmark / un-bookmark)
    - students.py:      /api/students                     (students CRUD)
    - student_quiz.py:  /api/student-quiz                 (quiz attempts CRUD)
    - debug.py:         GET  /api/debug/test-nodemailer   (SMTP check)

Routes stay thin: read the request, call a service, shape the response.
Ownership, existence checks and cascades live in the services.
"""
