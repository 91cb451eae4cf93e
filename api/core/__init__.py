"""
Pieces shared by the `ingredients` and `recipes` features: the asyncpg pool
and query helpers (`db`), the domain error taxonomy (`errors`) and the table
definitions (`schema.sql`).
"""
