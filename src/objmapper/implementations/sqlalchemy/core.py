"""
objmapper.implementations.sqlalchemy.core lets SQLAlchemy-mapped classes take part
in mappings.  The properties of a mapped instance are its column attributes instead
of whatever happens to be set on the instance, which for a freshly constructed
instance is next to nothing.

Synopsis
--------

.. code-block:: python

   from objmapper import AutoMapper, Configuration
   from objmapper.implementations.sqlalchemy import sqla_options

   config = Configuration(sqla_options())
   config.register_mapping(UserModel, UserView)
   config.register_mapping(UserView, UserModel).ignore_member("id")

   mapper = AutoMapper(config)
   user = mapper.map(view, UserModel)
   session.add(user)

"""
import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore
from sqlalchemy.orm.state import InstanceState  # type: ignore

from ...configuration import Options
from ...defaults import DefaultPropertyAccessorImpl


def is_alien_clause(sa_mapper: orm.Mapper, expression: sa.sql.ClauseElement) -> bool:
    if not isinstance(expression, sa.Column):
        return True
    if expression.table is None:
        return True
    return expression.table not in sa_mapper.tables


class SQLAPropertyAccessorImpl(DefaultPropertyAccessorImpl):
    """
    A :py:class:`objmapper.interfaces.PropertyAccessor` that lists the column attributes
    of SQLAlchemy-mapped instances, leaving out those that come from other tables
    (``column_property`` subqueries and the like) as they cannot be stored.
    Instances of unmapped classes are handled the default way.

    :param bool include_relationships: List the relationship attributes too.
    """

    include_relationships: bool

    def _sa_mapper_for(self, target: typing.Any) -> typing.Optional[orm.Mapper]:
        if isinstance(target, type):
            return None
        state = sa.inspect(target, raiseerr=False)
        if not isinstance(state, InstanceState):
            return None
        return state.mapper

    def get_property_names(self, target: typing.Any) -> typing.Sequence[str]:
        sa_mapper = self._sa_mapper_for(target)
        if sa_mapper is None:
            return super().get_property_names(target)
        names = [
            prop.key
            for prop in sa_mapper.column_attrs
            if not is_alien_clause(sa_mapper, prop.expression)
        ]
        if self.include_relationships:
            names.extend(prop.key for prop in sa_mapper.relationships)
        return names

    def __init__(self, include_relationships: bool = False):
        self.include_relationships = include_relationships


def sqla_options(include_relationships: bool = False, **kwargs: typing.Any) -> Options:
    """
    Returns :py:class:`objmapper.configuration.Options` set up for SQLAlchemy-mapped classes.

    :param bool include_relationships: See :py:class:`SQLAPropertyAccessorImpl`.
    :param kwargs: Any other :py:class:`objmapper.configuration.Options` field.
    """
    return Options(
        property_accessor=SQLAPropertyAccessorImpl(include_relationships=include_relationships),
        **kwargs,
    )
