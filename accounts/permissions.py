"""
Permissões DRF baseadas no papel do Profile.
"""
from rest_framework import permissions

from .roles import is_admin, is_curador


class IsCurador(permissions.BasePermission):
    """Admin ou gestor de setor (curadoria de ideias e moderação do Mural)."""
    message = 'Apenas administradores e gestores de setor podem executar esta ação.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_curador(request.user))


class IsAdminRole(permissions.BasePermission):
    """Apenas administradores."""
    message = 'Apenas administradores podem executar esta ação.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_admin(request.user))


class IsCuradorOrReadOnly(IsCurador):
    """Leitura para qualquer usuário autenticado; escrita só para curadores."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
