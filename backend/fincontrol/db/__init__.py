# Database package: engine/session management and ORM models.
