"""
Módulo de inicialização dos repositórios, gateways e casos de uso.
Deve ser importado somente depois que o Django estiver configurado.
"""
from django.conf import settings
from django.utils import timezone

from joalheria.core.carrinho import CarrinhoStore
from joalheria.core.checkout import SequenciadorCheckout
from joalheria.core import use_cases

from .repositories import (
    ProdutoRepositoryDjango as ProdutoRepository,
    PedidoRepositoryDjango as PedidoRepository,
    BannerRepositoryDjango as BannerRepository,
    ConfiguracaoRepositoryDjango as ConfiguracaoRepository,
    PromocaoRepositoryDjango as PromocaoRepository,
    CupomRepositoryDjango as CupomRepository,
    UsuarioRepositoryDjango as UsuarioRepository,
)
from .gateways import (
    MercadoPagoGateway,
    PagamentoGatewayMock,
    ViaCepGateway,
    GoogleOAuthGateway,
    ArmazenamentoArquivosLocal,
    ArmazenamentoCarrinhoSessao,
)

CHECKOUT_SESSION_KEY = 'checkout'

# Instâncias globais dos repositórios
produto_repo = ProdutoRepository()
pedido_repo = PedidoRepository()
banner_repo = BannerRepository()
configuracao_repo = ConfiguracaoRepository()
promocao_repo = PromocaoRepository()
cupom_repo = CupomRepository()
usuario_repo = UsuarioRepository()


def pagamento_gateway():
    if settings.USAR_PAGAMENTO_MOCK:
        return PagamentoGatewayMock()
    return MercadoPagoGateway()


def agora():
    return timezone.now()


# ====================================================================
# FÁBRICAS DE CASOS DE USO
# ====================================================================

def criar_pagamento_use_case():
    return use_cases.CriarPagamentoUseCase(
        pedido_repo=pedido_repo,
        produto_repo=produto_repo,
        cupom_repo=cupom_repo,
        pagamento_gateway=pagamento_gateway(),
    )


def carrinho_da_sessao(session) -> CarrinhoStore:
    return CarrinhoStore(ArmazenamentoCarrinhoSessao(session))


def checkout_da_sessao(session) -> SequenciadorCheckout:
    return SequenciadorCheckout(
        carrinho=carrinho_da_sessao(session),
        criar_pagamento=criar_pagamento_use_case(),
        estado=session.get(CHECKOUT_SESSION_KEY),
    )


def salvar_checkout_na_sessao(session, sequenciador: SequenciadorCheckout):
    session[CHECKOUT_SESSION_KEY] = sequenciador.para_dict()
    session.modified = True


def consultar_cep_use_case():
    return use_cases.ConsultarCepUseCase(ViaCepGateway())


def login_google_use_case():
    return use_cases.LoginGoogleUseCase(GoogleOAuthGateway(), usuario_repo)


def provedor_google():
    return GoogleOAuthGateway()


def enviar_imagem_use_case():
    return use_cases.EnviarImagemUseCase(ArmazenamentoArquivosLocal())
