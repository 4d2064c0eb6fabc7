#!/usr/bin/env python3

from sqlalchemy import (
    Column,
    String,
    Integer,
    BigInteger,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.schema import Index


# sqlite only autoincrements INTEGER primary keys
AutoId = BigInteger().with_variant(Integer, 'sqlite')


Base = declarative_base()


class Config (Base):
    '''
    Stores the configuration values for the application in key value pairs
    '''
    __tablename__ = 'configuration'

    name = Column(
        String(64),
        primary_key=True,
        doc="The setting's name")
    value = Column(
        'setting', String,
        doc="The setting's value")


class Prefix (Base):
    '''
    Stores the prefixes for servers
    '''
    __tablename__ = 'prefixes'

    server = Column(
        String(64),
        primary_key=True,
        doc='The server id for the prefix')
    prefix = Column(
        String(64),
        doc='The prefix for the server')


class Calculation (Base):
    '''
    A user's successfully evaluated expressions
    '''
    __tablename__ = 'calculations'

    id = Column(
        AutoId,
        primary_key=True,
        doc='An autonumber id')
    user = Column(
        String(64),
        nullable=False,
        doc='The id of the user that made the calculation')
    server = Column(
        String(64),
        doc='The server the calculation was made on, null in direct messages')
    expression = Column(
        String,
        nullable=False,
        doc='The expression as typed')
    result = Column(
        String(64),
        nullable=False,
        doc='The formatted result')

    __table_args__ = (
        Index('_calculation_index', user, id),
    )

    def __str__(self):
        return '`{0.expression}` = {0.result}'.format(self)
