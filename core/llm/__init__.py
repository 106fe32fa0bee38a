"""LLM Module - LLM services and interfaces."""
from core.llm.interfaces import LLMProvider
from core.llm.credentials import AccessTokenProvider
from core.llm.vertex_service import VertexAIService, parse_json_object

__all__ = ['LLMProvider', 'AccessTokenProvider', 'VertexAIService', 'parse_json_object']
