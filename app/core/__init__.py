"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps. No domain logic lives
here.

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base for every domain exception

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling
"""
