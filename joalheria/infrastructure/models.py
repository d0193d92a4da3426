# Define os modelos do banco de dados para a camada de infraestrutura (usuários e preferências).

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings

# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o email é o identificador único
    para autenticação, em vez dos nomes de usuário.
    """
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('O e-mail deve ser definido')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            # Usuários do login Google não têm senha local
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Cria e salva um Superusuário com o e-mail e senha fornecidos.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


# ====================================================================
# MODELO DE USUÁRIO
# ====================================================================

class Usuario(AbstractUser):
    """
    Modelo de Usuário Personalizado que utiliza o campo 'email' como identificador
    principal para login, em vez de 'username'.
    """
    username = None

    email = models.EmailField('Endereço de E-mail', unique=True)
    nome = models.CharField(max_length=255, blank=True)

    # Dados do login Google
    google_id = models.CharField(max_length=255, unique=True, blank=True, null=True)
    avatar_url = models.URLField(max_length=500, blank=True, null=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    # Define related_name para grupos e permissões
    groups = models.ManyToManyField(
        'auth.Group',
        verbose_name='groups',
        blank=True,
        related_name="infra_user_set",
        related_query_name="infra_user",
    )
    user_permissions = models.ManyToManyField(
        'auth.Permission',
        verbose_name='user permissions',
        blank=True,
        related_name="infra_user_set",
        related_query_name="infra_user",
    )

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'infra_usuario'

    def __str__(self):
        return self.email


class Endereco(models.Model):
    """
    Endereço de entrega salvo pelo usuário. Apenas um é o padrão.
    """
    usuario = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='enderecos')
    cep = models.CharField(max_length=10, verbose_name="CEP")
    rua = models.CharField(max_length=255, verbose_name="Rua")
    numero = models.CharField(max_length=10, verbose_name="Número")
    complemento = models.CharField(max_length=100, blank=True, null=True, verbose_name="Complemento")
    bairro = models.CharField(max_length=100, blank=True, verbose_name="Bairro")
    cidade = models.CharField(max_length=100, blank=True, verbose_name="Cidade")
    estado = models.CharField(max_length=50, blank=True, verbose_name="Estado")
    padrao = models.BooleanField(default=False, verbose_name="Endereço Padrão")

    class Meta:
        verbose_name = 'Endereço do Usuário'
        verbose_name_plural = 'Endereços do Usuário'
        db_table = 'usuario_endereco'
        ordering = ['-padrao', '-id']

    def __str__(self):
        return f"{self.usuario} - {self.rua}, {self.numero}"


class Favorito(models.Model):
    usuario = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='favoritos')
    produto = models.ForeignKey('catalog.Produto', on_delete=models.CASCADE, related_name='favoritado_por')
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Favorito'
        verbose_name_plural = 'Favoritos'
        db_table = 'usuario_favorito'
        unique_together = ('usuario', 'produto')

    def __str__(self):
        return f"{self.usuario} ♥ {self.produto_id}"
