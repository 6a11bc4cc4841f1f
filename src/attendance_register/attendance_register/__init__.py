"""Attendance Register package.

Local-first attendance register: an in-memory Document (columns, roster,
attendance matrix, title) kept in a durable local store and synchronized with
a remote spreadsheet-backed document store. Feature modules (document,
storage, remote, sync, views, register) follow the service/repository layout
with a thin Flask controller on top.
"""
