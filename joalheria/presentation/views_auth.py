# joalheria/presentation/views_auth.py
"""
Views para autenticação via Google (OAuth 2.0, authorization code).
A sessão Django é aberta no callback; o endpoint `me` também devolve
um par de tokens JWT para clientes que preferem o header Authorization.
"""
import logging
import secrets

from django.conf import settings
from django.contrib.auth import get_user_model, login, logout
from django.shortcuts import redirect
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from joalheria.core.exceptions import AutenticacaoFalhouError
from joalheria.infrastructure import instances
from joalheria.infrastructure.mappers import UsuarioMapper
from .serializers import UsuarioSerializer

logger = logging.getLogger(__name__)

STATE_SESSION_KEY = 'google_oauth_state'


class GoogleLoginView(APIView):
    """Redireciona para a tela de consentimento do Google."""
    permission_classes = [AllowAny]

    def get(self, request):
        state = secrets.token_urlsafe(16)
        request.session[STATE_SESSION_KEY] = state
        return redirect(instances.provedor_google().url_autorizacao(state))


class GoogleCallbackView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        state_esperado = request.session.pop(STATE_SESSION_KEY, None)
        if not state_esperado or request.query_params.get('state') != state_esperado:
            return Response({'message': 'Estado de autenticação inválido.'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            usuario = instances.login_google_use_case().executar(request.query_params.get('code'))
        except AutenticacaoFalhouError as e:
            logger.warning("Login Google recusado: %s", e.message)
            return Response({'message': e.message}, status=status.HTTP_401_UNAUTHORIZED)

        user = get_user_model().objects.get(pk=usuario.id)
        login(request, user, backend='django.contrib.auth.backends.ModelBackend')
        return redirect(settings.APP_URL)


class MeAPIView(APIView):
    """Dados do usuário logado e tokens JWT de acesso."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        refresh = RefreshToken.for_user(request.user)
        dados = UsuarioSerializer(UsuarioMapper.to_entity(request.user)).data
        dados['tokens'] = {'access': str(refresh.access_token), 'refresh': str(refresh)}
        return Response(dados)


class LogoutAPIView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        logout(request)
        return Response({'message': 'Sessão encerrada.'})
