"""Shared plumbing for panchrang's colour and election modules.

Record types and shape checks (types), settings read from .env (env), the
package logger (log), and renderers for results and palettes (report, swatch).
Nothing in here imports panchrang.colors or panchrang.election.
"""
