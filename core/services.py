"""
Services de notificação (in-app e WhatsApp).

Concentra a criação de Notification usada por ideias, mural e
treinamentos, e o disparo em massa (send-notification) feito por
administradores e gestores de setor.
"""
import logging
import random

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction

from accounts.models import Profile
from accounts.roles import PAPEIS, is_curador

from .config import default_for
from .models import Notification, NotificationType, Setting
from .whatsapp import format_message

logger = logging.getLogger(__name__)


def get_setting(key, default=None):
    """
    Lê uma configuração de negócio da tabela settings.

    Sem `default` explícito, usa o padrão definido em core.config.
    """
    if default is None:
        try:
            default = default_for(key)
        except KeyError:
            default = None
    return Setting.get_value(key, default)


class NotificationService:
    """Criação e disparo de notificações."""

    @staticmethod
    def notify(user, notification_type, title, message, reference_id='', send_whatsapp=False):
        """
        Cria uma notificação in-app para `user`.

        Com send_whatsapp, também enfileira a mensagem se o perfil aceitar WhatsApp.
        """
        notification = Notification.objects.create(
            user=user,
            notification_type=notification_type,
            title=title,
            message=message,
            reference_id=str(reference_id or ''),
        )
        logger.info("Notificação %s criada para %s: %s", notification_type, user.username, title)
        if send_whatsapp:
            profile = getattr(user, 'profile', None)
            if profile is not None:
                NotificationService.queue_whatsapp([profile], title, message)
        return notification

    @staticmethod
    def queue_whatsapp(profiles, title, message):
        """
        Enfileira mensagens de WhatsApp para os perfis que optaram por recebê-las.

        As mensagens saem espaçadas por um intervalo aleatório entre
        whatsapp_queue_delay_min e whatsapp_queue_delay_max segundos,
        acumulado a cada envio. Retorna quantas foram enfileiradas.
        """
        from .tasks import enviar_whatsapp

        delay_min = int(get_setting('whatsapp_queue_delay_min'))
        delay_max = int(get_setting('whatsapp_queue_delay_max'))
        if delay_max < delay_min:
            delay_max = delay_min

        text = format_message(title, message)
        countdown = 0
        queued = 0
        for profile in profiles:
            if not profile.wants_whatsapp:
                continue
            enviar_whatsapp.apply_async(args=[profile.phone, text], countdown=countdown)
            countdown += random.randint(delay_min, delay_max)
            queued += 1
        if queued:
            logger.info("WhatsApp: %s mensagens enfileiradas (%s)", queued, title)
        return queued

    @staticmethod
    def resolve_recipients(user_ids=None, roles=None, units=None):
        """
        Perfis ativos que recebem um comunicado.

        Com `user_ids` o envio é direto; senão filtra por papéis e/ou
        unidades. Sem nenhum filtro, nada é selecionado.
        """
        profiles = Profile.objects.select_related('user').filter(is_active=True, user__is_active=True)
        if user_ids:
            return profiles.filter(user_id__in=user_ids)
        if not roles and not units:
            return profiles.none()
        if roles:
            profiles = profiles.filter(role__in=roles)
        if units:
            profiles = profiles.filter(unit_id__in=units)
        return profiles

    @staticmethod
    @transaction.atomic
    def broadcast(sender, title, message, user_ids=None, roles=None, units=None,
                  send_whatsapp=False, notification_type=NotificationType.ANNOUNCEMENT,
                  reference_id=''):
        """
        Dispara um comunicado para vários usuários.

        Returns:
            dict com notified (notificações criadas) e whatsapp_queued.

        Raises:
            PermissionDenied: se `sender` não for admin ou gestor de setor
            ValidationError: se faltar título/mensagem ou papel for inválido
        """
        if not is_curador(sender):
            raise PermissionDenied("Apenas administradores e gestores de setor podem enviar comunicados.")

        title = (title or '').strip()
        message = (message or '').strip()
        if not title or not message:
            raise ValidationError("Título e mensagem são obrigatórios.")

        invalid = [r for r in (roles or []) if r not in PAPEIS.TODOS]
        if invalid:
            raise ValidationError(f"Papéis inválidos: {', '.join(invalid)}")

        profiles = list(NotificationService.resolve_recipients(user_ids, roles, units))
        Notification.objects.bulk_create([
            Notification(
                user=profile.user,
                notification_type=notification_type,
                title=title,
                message=message,
                reference_id=str(reference_id or ''),
            )
            for profile in profiles
        ])
        logger.info(
            "Comunicado '%s' enviado por %s para %s usuários",
            title, sender.username, len(profiles),
        )

        queued = 0
        if send_whatsapp:
            queued = NotificationService.queue_whatsapp(profiles, title, message)
        return {'notified': len(profiles), 'whatsapp_queued': queued}

    @staticmethod
    def mark_all_read(user):
        return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
