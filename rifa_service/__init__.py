"""Rifa Service.

REST service letting an operator wallet deploy raffles bound to the RealDigital
token, approve token spending and enter raffles on behalf of users.
"""

__version__ = "0.1.0"
