"""
Reinfate tables engine: monthly data grids with quarterly/YTD aggregation and
cross-table shape validation.
"""
