"""
Package marker for pagination, sort resolution and row grouping helpers.
The pure helpers never execute queries; `query` applies their decisions to SQLAlchemy statements.
"""
