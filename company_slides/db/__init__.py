"""Database access: batch insert, connection resolution and company stores."""
