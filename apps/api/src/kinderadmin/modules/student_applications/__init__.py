"""
Student Applications Module

Handles the enrollment application workflow:
1. Public intake of the enrollment form
2. Administrator review of pending applications
3. Accept (enroll student and guardian) or reject
4. Email notification of the decision to the guardian

API Endpoints:
- POST /student-applications - Submit new application
- GET /admin/student-applications - List pending applications
- GET /admin/student-applications/{id} - Application detail
- POST /admin/student-applications/{id}/accept - Accept
- POST /admin/student-applications/{id}/reject - Reject
"""

from kinderadmin.modules.student_applications.models import StudentApplication

__all__ = ["StudentApplication"]
