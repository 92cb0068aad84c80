# ABOUTME: Core sync logic: path escaping, copy planning, orchestration, and shelving.
# ABOUTME: Nothing here talks to the console; progress goes through a SyncReporter.
