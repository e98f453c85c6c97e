"""
Command Line Interface Package

Command-line front end to the exactmoney value engine.

Command Structure:
- exactmoney: Main entry point with utility commands (version, config)
- exactmoney create: Build a Money in a chosen context
- exactmoney allocate / divide: Split amounts without losing a minor unit
- exactmoney convert: Apply an exchange rate
- exactmoney format: Locale formatting through Babel

Every command resolves currencies through the registry built from the
current configuration, and reports value engine errors as click errors.
"""
