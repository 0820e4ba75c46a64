"""Ponto Engine package.

Reconciles raw time-clock punches (AFD files, web clock-in, manual entry)
against CLT work schedules and derives the monthly timesheet mirror
("espelho de ponto"). Organized by feature modules (afd, punches,
adjustments, timesheet, ...) with pure calculation functions, thin Flask
controllers and Protocol-based repositories.
"""
