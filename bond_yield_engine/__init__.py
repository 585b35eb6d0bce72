"""
Bond Yield Engine

Modules:
- utils: period counts, payment dates, currency rounding
- bonds: bond input + period model + closed-form yield measures + pricing function
- ytm: Newton-Raphson yield to maturity
- schedule: coupon cash-flow schedule
- engine: one-call calculation assembling all results
- api / cli: validating front ends (HTTP, command line)
"""

__version__ = "1.0.0"
