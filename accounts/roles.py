"""
Constantes centralizadas para os papéis (roles) do Portal Cresci e Perdi.

Cada usuário tem exatamente um papel, guardado em Profile.role:
  - admin: administração da rede (curadoria, configurações, usuários).
  - gestor_setor: gestor de setor da franqueadora (curadoria e moderação).
  - franqueado / gerente / colaborador: usuários das unidades.

Uso:
    from accounts.roles import PAPEIS

    if resolve_role(user) in PAPEIS.CURADORES:
        ...
"""


class _Papeis:
    """
    Container para os nomes de papéis do portal.
    Evita typos e centraliza alterações.
    """

    ADMIN = 'admin'
    GESTOR_SETOR = 'gestor_setor'
    FRANQUEADO = 'franqueado'
    GERENTE = 'gerente'
    COLABORADOR = 'colaborador'

    CHOICES = [
        (ADMIN, 'Administrador'),
        (GESTOR_SETOR, 'Gestor de Setor'),
        (FRANQUEADO, 'Franqueado'),
        (GERENTE, 'Gerente'),
        (COLABORADOR, 'Colaborador'),
    ]

    @property
    def CURADORES(self):
        """Papéis que moderam o Mural e fazem a curadoria de ideias."""
        return [self.ADMIN, self.GESTOR_SETOR]

    @property
    def RESPONSAVEIS_IMPLEMENTACAO(self):
        """Papéis que podem ser responsáveis pela implementação de uma ideia."""
        return [self.ADMIN, self.GESTOR_SETOR]

    @property
    def TODOS(self):
        return [value for value, _ in self.CHOICES]


# Instância singleton para importar diretamente
PAPEIS = _Papeis()


def resolve_role(user):
    """
    Retorna o papel do usuário ou None para anônimos.

    Superusers e staff são sempre tratados como admin. Usuário sem
    Profile é tratado como colaborador.
    """
    if not user or not getattr(user, 'is_authenticated', False):
        return None
    if user.is_superuser or user.is_staff:
        return PAPEIS.ADMIN
    from .models import Profile

    try:
        return user.profile.role
    except Profile.DoesNotExist:
        return PAPEIS.COLABORADOR


def is_admin(user):
    return resolve_role(user) == PAPEIS.ADMIN


def is_curador(user):
    """Admin ou gestor de setor."""
    return resolve_role(user) in PAPEIS.CURADORES
