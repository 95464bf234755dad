from .core import SQLAPropertyAccessorImpl, is_alien_clause, sqla_options  # noqa: F401
