"""
Services Layer

Draw logic over in-memory models:
- Accept a Tournament, its rounds and the pairs to place
- Mutate slots in place; rounds are created once and never rebuilt
- Do NOT depend on HTTP request/response objects
"""
