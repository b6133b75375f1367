"""Business logic services.

Services contain all business logic and are called by routes.
Services should be deterministic when possible and accept dependencies explicitly.

- junk_tokens: novel token extraction from reported titles
- junk_cache: learned-signal cache and refresh policy
- junk_scorer: soft confidence penalties
- junk_reports: recording reviewer reports
- junk_signals: process-wide wiring used by routes and the scanner
"""
