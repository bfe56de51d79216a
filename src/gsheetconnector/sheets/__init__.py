"""
Sheets v4 side of the connector: A1 ranges, API resource structs,
request wrappers and the in-memory sheet cache.
"""

# column letters stop at 'ZZZ'
GoogleSheetsMaxColumns = 18278
