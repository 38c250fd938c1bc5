# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic and database access for a single aggregate:
#
#   user_service           — lookups + CRUD for User, cascade session delete
#   session_service        — login sessions of a User
#   user_role_service      — read-only role catalogue
#   city_service           — CRUD for City
#   social_status_service  — CRUD for SocialStatus
#   customer_service       — CRUD for Customer
#
# Shared building blocks:
#
#   versioning  — conditional UPDATE/DELETE on the ``version`` column
#   decorators  — optimistic locking, uniqueness pre-check, read errors
#   passwords   — bcrypt hashing in a worker thread
#
# All service functions accept an AsyncSession as their first argument.
# Reads leave the transaction to the ``get_db`` dependency; writes commit
# their own unit of work through ``app.database.transaction``.
