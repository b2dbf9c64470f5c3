"""
Testes de papéis, criação automática de perfis e API de perfis.
"""
from django.contrib.auth.models import AnonymousUser, User
from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import Profile, Unit
from accounts.roles import PAPEIS, is_admin, is_curador, resolve_role


class ProfileSignalTestCase(TestCase):

    def test_usuario_novo_ganha_perfil_de_colaborador(self):
        user = User.objects.create_user(username='maria', password='test123', first_name='Maria', last_name='Souza')
        profile = Profile.objects.get(user=user)
        self.assertEqual(profile.role, PAPEIS.COLABORADOR)
        self.assertEqual(profile.full_name, 'Maria Souza')
        self.assertEqual(profile.display_name, 'Maria Souza')

    def test_salvar_de_novo_nao_duplica(self):
        user = User.objects.create_user(username='joao', password='test123')
        user.first_name = 'João'
        user.save()
        self.assertEqual(Profile.objects.filter(user=user).count(), 1)

    def test_whatsapp_exige_telefone_e_consentimento(self):
        profile = User.objects.create_user(username='ana', password='test123').profile
        profile.receive_whatsapp_notifications = True
        self.assertFalse(profile.wants_whatsapp)
        profile.phone = '11987654321'
        self.assertTrue(profile.wants_whatsapp)


class ResolveRoleTestCase(TestCase):

    def _user(self, username, role):
        user = User.objects.create_user(username=username, password='test123')
        user.profile.role = role
        user.profile.save()
        return user

    def test_anonimo(self):
        self.assertIsNone(resolve_role(AnonymousUser()))
        self.assertFalse(is_curador(AnonymousUser()))

    def test_superuser_e_admin(self):
        user = User.objects.create_superuser(username='root', password='test123', email='root@test.com')
        self.assertEqual(resolve_role(user), PAPEIS.ADMIN)
        self.assertTrue(is_admin(user))

    def test_curadores(self):
        self.assertTrue(is_curador(self._user('gestor', PAPEIS.GESTOR_SETOR)))
        self.assertFalse(is_admin(self._user('gestor2', PAPEIS.GESTOR_SETOR)))
        self.assertFalse(is_curador(self._user('franqueado', PAPEIS.FRANQUEADO)))
        self.assertFalse(is_curador(self._user('gerente', PAPEIS.GERENTE)))

    def test_usuario_sem_perfil_e_colaborador(self):
        user = User.objects.create_user(username='sem_perfil', password='test123')
        Profile.objects.filter(user=user).delete()
        user = User.objects.get(pk=user.pk)
        self.assertEqual(resolve_role(user), PAPEIS.COLABORADOR)

    def test_lista_de_papeis(self):
        self.assertEqual(PAPEIS.CURADORES, ['admin', 'gestor_setor'])
        self.assertIn('colaborador', PAPEIS.TODOS)
        self.assertEqual(len(PAPEIS.TODOS), 5)


class ProfileAPITestCase(TestCase):

    def setUp(self):
        self.unit = Unit.objects.create(code='RJ-010', name='Loja Copacabana', state='RJ')
        self.admin = User.objects.create_user(username='admin', password='test123')
        self.admin.profile.role = PAPEIS.ADMIN
        self.admin.profile.save()
        self.colaborador = User.objects.create_user(username='colab', password='test123')
        self.client = APIClient()

    def test_me(self):
        self.client.force_authenticate(user=self.colaborador)
        response = self.client.get('/api/accounts/profiles/me/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['username'], 'colab')
        self.assertEqual(response.data['role'], PAPEIS.COLABORADOR)

    def test_filtra_por_papel(self):
        self.client.force_authenticate(user=self.colaborador)
        response = self.client.get('/api/accounts/profiles/', {'role': PAPEIS.ADMIN})
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['username'], 'admin')

    def test_apenas_admin_altera_perfil(self):
        url = f'/api/accounts/profiles/{self.colaborador.profile.pk}/'
        self.client.force_authenticate(user=self.colaborador)
        response = self.client.patch(url, {'role': PAPEIS.ADMIN}, format='json')
        self.assertEqual(response.status_code, 403)

        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(url, {'role': PAPEIS.GERENTE, 'unit': self.unit.pk}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['unit_code'], 'RJ-010')

    def test_unidades(self):
        self.client.force_authenticate(user=self.colaborador)
        self.assertEqual(self.client.get('/api/accounts/units/').data['count'], 1)
        response = self.client.post('/api/accounts/units/', {'code': 'MG-001', 'name': 'BH'}, format='json')
        self.assertEqual(response.status_code, 403)
