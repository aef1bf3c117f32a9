"""Dependency providers for routers."""

from fastapi import Request

from shardsheet.services.character_service import CharacterService


def get_character_service(request: Request) -> CharacterService:
    """CharacterService instance (dependency injection)"""
    service: CharacterService = request.app.state.character_service
    return service
