"""Authentication and authorization.

One credential scheme: HTTP Basic with email address + password, checked
against a bcrypt hash. One authorization rule: a course may only be changed
by the user who owns it.

    header ─► credentials.parse_basic_authorization
           ─► verifier.verify_credentials
           ─► dependencies.get_current_user   (401 or AuthenticatedIdentity)
           ─► ownership.authorize_course_change (404 / 403 / course)
"""
