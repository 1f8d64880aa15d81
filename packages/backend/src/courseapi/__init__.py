"""Course catalog API.

REST backend for a course-management app: HTTP Basic authentication,
user signup, and owner-scoped CRUD over courses.
"""

__version__ = "0.1.0"
