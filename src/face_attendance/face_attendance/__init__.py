"""Face attendance package.

Feature modules (location, faces, attendance, settings, staff) each keep a
thin Flask controller on top of service and repository layers.
"""
