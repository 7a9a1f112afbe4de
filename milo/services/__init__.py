"""
Services module - business logic between the HTTP layer and the AI layer.

- intent_cache: TTL cache for intents and conversational answers
- handlers: command and conversation strategies
- response_service: classify, then dispatch to a handler
- transcription_service: two-pass audio transcription
"""
