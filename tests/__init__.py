"""
Test package root.

Only this directory carries an __init__.py; subdirectories such as tests/helpers and
tests/unit/monetary are namespace packages (PEP 420). Keeping the root a regular
package lets test modules import shared helpers as `tests.helpers.<module>`.
"""
