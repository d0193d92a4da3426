import logging
import random
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests
from django.conf import settings
from django.core.files.storage import FileSystemStorage

# Importa os Protocols e Entidades da camada Core
from joalheria.core.ports import (
    IGatewayPagamento, IConsultaCep, IProvedorIdentidade, IArmazenamentoArquivos, IArmazenamentoCarrinho,
)
from joalheria.core.entities import Pedido, Endereco, TransacaoPagamento, StatusPedido, MetodoPagamento
from joalheria.core.espera import EsperaLimitada
from joalheria.core.exceptions import (
    PagamentoFalhouError,
    GatewayIndisponivelError,
    TempoEsgotadoError,
    AutenticacaoFalhouError,
    ServicoIndisponivelError,
)

logger = logging.getLogger(__name__)


# ====================================================================
# GATEWAYS: Implementações concretas que se comunicam com APIs externas.
# ====================================================================

class MercadoPagoGateway(IGatewayPagamento):
    """
    Gateway para comunicação com a API de Pagamento do Mercado Pago.
    Implementa a interface IGatewayPagamento do Core, unificando os
    métodos de pagamento específicos.
    """

    # Mapeamento do status do Mercado Pago para o status do Pedido
    _STATUS_MAP = {
        "approved": StatusPedido.APROVADO,
        "authorized": StatusPedido.PENDENTE,
        "pending": StatusPedido.PENDENTE,
        "in_process": StatusPedido.PENDENTE,
        "in_mediation": StatusPedido.PENDENTE,
        "rejected": StatusPedido.REJEITADO,
        "cancelled": StatusPedido.REJEITADO,
        "refunded": StatusPedido.ESTORNADO,
        "charged_back": StatusPedido.ESTORNADO,
    }

    def __init__(self,
                 access_token: Optional[str] = None,
                 api_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 espera_segundos: Optional[float] = None,
                 espera: Optional[EsperaLimitada] = None):
        self.access_token = access_token or settings.MERCADO_PAGO_ACCESS_TOKEN
        self.api_base_url = (api_url or settings.MERCADO_PAGO_API_URL).rstrip('/')
        self.timeout = timeout or settings.MERCADO_PAGO_TIMEOUT
        self.espera_segundos = espera_segundos if espera_segundos is not None else settings.MERCADO_PAGO_ESPERA_SEGUNDOS
        self._espera = espera

        if not self.access_token:
            logger.error("MERCADO_PAGO_ACCESS_TOKEN não configurado. Pagamentos reais falharão.")

    def _headers(self, idempotente: bool = False) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        if idempotente:
            headers["X-Idempotency-Key"] = str(uuid.uuid4())  # Para evitar duplicidade
        return headers

    # --- DISPONIBILIDADE (espera limitada) ---

    def _disponivel(self) -> bool:
        try:
            response = requests.get(
                f"{self.api_base_url}/payment_methods", headers=self._headers(), timeout=self.timeout
            )
            return response.status_code < 500
        except requests.exceptions.RequestException as e:
            logger.debug("Mercado Pago ainda indisponível: %s", e)
            return False

    def aguardar_disponibilidade(self):
        """Aguarda, com prazo, até a API responder. Falha como GatewayIndisponivelError."""
        espera = self._espera or EsperaLimitada(timeout=self.espera_segundos, intervalo=0.5)
        try:
            espera.aguardar(self._disponivel)
        except TempoEsgotadoError:
            logger.error("Mercado Pago indisponível após %ss.", espera.timeout)
            raise GatewayIndisponivelError()

    # --- MONTAGEM DO PAYLOAD ---

    @staticmethod
    def _payer(pedido: Pedido) -> Dict[str, Any]:
        partes = (pedido.cliente.nome or '').split()
        return {
            "email": pedido.cliente.email,
            "first_name": partes[0] if partes else "Comprador",
            "last_name": partes[-1] if len(partes) > 1 else "",
            "identification": {
                "type": "CPF",
                "number": ''.join(c for c in pedido.cliente.cpf if c.isdigit()),
            },
        }

    def _payload(self, pedido: Pedido, dados: dict) -> Dict[str, Any]:
        payload = {
            "transaction_amount": float(pedido.total),
            "description": f"Pedido {pedido.id}",
            "external_reference": str(pedido.id),
            "payer": self._payer(pedido),
        }
        metodo = pedido.metodo_pagamento

        if metodo == MetodoPagamento.PIX.value:
            payload["payment_method_id"] = "pix"
        elif metodo == MetodoPagamento.BOLETO.value:
            endereco = pedido.endereco_entrega
            payload["payment_method_id"] = "bolbradesco"
            payload["payer"]["address"] = {
                "zip_code": endereco.cep.replace('-', ''),
                "street_name": endereco.rua,
                "street_number": endereco.numero,
                "neighborhood": endereco.bairro,
                "city": endereco.cidade,
                "federal_unit": endereco.estado,
            }
        else:
            # Cartão: token obtido no frontend via SDK do Mercado Pago
            token = dados.get('token')
            if not token:
                raise PagamentoFalhouError("Token de cartão ausente na requisição.")
            payload["token"] = token
            payload["installments"] = int(dados.get('installments') or 1)
            if dados.get('payment_method_id'):
                payload["payment_method_id"] = dados['payment_method_id']
        return payload

    @staticmethod
    def _transacao(data: dict, status: StatusPedido) -> TransacaoPagamento:
        transaction_data = (data.get("point_of_interaction") or {}).get("transaction_data") or {}
        detalhes = data.get("transaction_details") or {}
        return TransacaoPagamento(
            status=status,
            referencia_externa=str(data.get("id")) if data.get("id") is not None else None,
            qr_code=transaction_data.get("qr_code"),
            qr_code_base64=transaction_data.get("qr_code_base64"),
            boleto_url=detalhes.get("external_resource_url") or transaction_data.get("ticket_url"),
            detalhe=data.get("status_detail"),
        )

    # --- MÉTODOS PÚBLICOS QUE IMPLEMENTAM O PROTOCOLO CORE ---

    def processar_pagamento(self, pedido: Pedido, dados: dict) -> TransacaoPagamento:
        payload = self._payload(pedido, dados)
        self.aguardar_disponibilidade()

        try:
            response = requests.post(
                f"{self.api_base_url}/payments", json=payload,
                headers=self._headers(idempotente=True), timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Erro de conexão com a API do Mercado Pago (pedido #%s): %s", pedido.id, e)
            raise PagamentoFalhouError(f"Erro de conexão com a API do Mercado Pago: {e}")

        data = response.json()
        status = self._STATUS_MAP.get(data.get("status"), StatusPedido.REJEITADO)
        return self._transacao(data, status)

    def verificar_status(self, transacao_id: str) -> TransacaoPagamento:
        """Busca o status atual de uma transação (pagamento) no Mercado Pago."""
        try:
            response = requests.get(
                f"{self.api_base_url}/payments/{transacao_id}", headers=self._headers(), timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Falha ao buscar status da transação %s: %s", transacao_id, e)
            raise PagamentoFalhouError("Falha ao buscar status da transação no Gateway.")

        data = response.json()
        return self._transacao(data, self._STATUS_MAP.get(data.get("status"), StatusPedido.PENDENTE))


class PagamentoGatewayMock(IGatewayPagamento):
    """
    Gateway de Pagamento Mock (Simulado), para desenvolvimento sem credenciais.
    Cartão é aprovado; Pix e Boleto ficam pendentes com QR Code/URL fictícios.
    O token 'recusar' simula uma recusa do emissor.
    """

    def processar_pagamento(self, pedido: Pedido, dados: dict) -> TransacaoPagamento:
        referencia = f"MOCK-{random.randint(100000, 999999)}"
        metodo = pedido.metodo_pagamento

        if metodo == MetodoPagamento.PIX.value:
            return TransacaoPagamento(
                status=StatusPedido.PENDENTE,
                referencia_externa=referencia,
                qr_code=f"00020126MOCKPIX{pedido.id}{Decimal(pedido.total):.2f}",
                qr_code_base64="",
            )
        if metodo == MetodoPagamento.BOLETO.value:
            return TransacaoPagamento(
                status=StatusPedido.PENDENTE,
                referencia_externa=referencia,
                boleto_url=f"https://boleto.mock/{referencia}",
            )
        if dados.get('token') == 'recusar':
            return TransacaoPagamento(
                status=StatusPedido.REJEITADO,
                referencia_externa=referencia,
                detalhe="Pagamento rejeitado: cartão recusado (MOCK).",
            )
        return TransacaoPagamento(status=StatusPedido.APROVADO, referencia_externa=referencia)

    def verificar_status(self, transacao_id: str) -> TransacaoPagamento:
        if not str(transacao_id).startswith("MOCK-"):
            raise PagamentoFalhouError("Transação Mock não encontrada.")
        return TransacaoPagamento(status=StatusPedido.APROVADO, referencia_externa=transacao_id)


# ====================================================================
# CEP, LOGIN GOOGLE E ARQUIVOS
# ====================================================================

class ViaCepGateway(IConsultaCep):
    """Consulta de endereço pelo CEP na API pública do ViaCEP."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 5):
        self.base_url = (base_url or settings.VIACEP_URL).rstrip('/')
        self.timeout = timeout

    def consultar(self, cep: str) -> Optional[Endereco]:
        try:
            response = requests.get(f"{self.base_url}/{cep}/json/", timeout=self.timeout)
            if response.status_code == 400:
                return None
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("Falha ao consultar o CEP %s: %s", cep, e)
            raise ServicoIndisponivelError("Não foi possível consultar o CEP.")

        data = response.json()
        if data.get("erro"):
            return None
        return Endereco(
            cep=data.get("cep", cep),
            rua=data.get("logradouro", ""),
            bairro=data.get("bairro", ""),
            cidade=data.get("localidade", ""),
            estado=data.get("uf", ""),
        )


class GoogleOAuthGateway(IProvedorIdentidade):
    """Fluxo authorization code do Google (OAuth 2.0)."""

    AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(self,
                 client_id: Optional[str] = None,
                 client_secret: Optional[str] = None,
                 redirect_uri: Optional[str] = None,
                 timeout: float = 10):
        self.client_id = client_id or settings.GOOGLE_CLIENT_ID
        self.client_secret = client_secret or settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = redirect_uri or f"{settings.APP_URL.rstrip('/')}/auth/google/callback"
        self.timeout = timeout

    def url_autorizacao(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
            "prompt": "select_account",
        }
        return f"{self.AUTH_URL}?{urlencode(params)}"

    def obter_perfil(self, codigo: str) -> Dict[str, Any]:
        try:
            token_response = requests.post(self.TOKEN_URL, data={
                "code": codigo,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            }, timeout=self.timeout)
            token_response.raise_for_status()
            access_token = token_response.json().get("access_token")
            if not access_token:
                raise AutenticacaoFalhouError("O Google não retornou um token de acesso.")

            perfil_response = requests.get(
                self.USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"}, timeout=self.timeout
            )
            perfil_response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Falha no login Google: %s", e)
            raise AutenticacaoFalhouError()

        return perfil_response.json()


class ArmazenamentoArquivosLocal(IArmazenamentoArquivos):
    """Grava os uploads em MEDIA_ROOT/uploads e retorna a URL pública."""

    def __init__(self, storage: Optional[FileSystemStorage] = None):
        self.storage = storage or FileSystemStorage(
            location=settings.MEDIA_ROOT / 'uploads',
            base_url=f"{settings.MEDIA_URL}uploads/",
        )

    def salvar(self, nome: str, conteudo) -> str:
        nome_salvo = self.storage.save(nome, conteudo)
        return self.storage.url(nome_salvo)


class ArmazenamentoCarrinhoSessao(IArmazenamentoCarrinho):
    """Guarda os itens do carrinho na sessão Django do visitante."""

    SESSION_KEY = 'carrinho'

    def __init__(self, session):
        self.session = session

    def carregar(self) -> List[Dict[str, Any]]:
        return list(self.session.get(self.SESSION_KEY, []))

    def salvar(self, itens: List[Dict[str, Any]]) -> None:
        self.session[self.SESSION_KEY] = itens
        self.session.modified = True
