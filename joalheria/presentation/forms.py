# joalheria/presentation/forms.py

from django import forms
from django.contrib.auth.forms import UserCreationForm, UserChangeForm

from joalheria.infrastructure.models import Usuario


# --- FORMULÁRIOS DO ADMIN DE USUÁRIOS ---

class UsuarioCreationForm(UserCreationForm):
    """
    Criação de usuário pelo Admin (login por e-mail, sem 'username').
    Usuários da loja são criados no primeiro login Google; este formulário
    serve para a equipe criar contas administrativas com senha.
    """
    email = forms.EmailField(label="E-mail", max_length=254, required=True)

    class Meta:
        model = Usuario
        fields = ('email', 'nome')


class UsuarioChangeForm(UserChangeForm):

    class Meta:
        model = Usuario
        fields = ('email', 'nome', 'google_id', 'avatar_url')
