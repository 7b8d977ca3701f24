"""
Command Line Interface Package

Command Structure:
- monthly-averages averages: Monthly spending/income report as JSON
- monthly-averages accounts: List the user's accounts
- monthly-averages version / config: Utility commands
"""
