# joalheria/core/checkout.py
"""
Sequenciador do checkout em 5 etapas:
dados do cliente -> endereço -> método de pagamento -> revisão -> confirmação.

As transições são sempre de uma etapa (avançar/voltar). Cada avanço tem uma
guarda de campos obrigatórios; uma guarda que falha não altera a etapa.
"""
import logging
import re
from enum import IntEnum
from typing import Any, Dict, List, Optional

from joalheria.core.carrinho import CarrinhoStore
from joalheria.core.entities import DadosCliente, Endereco, MetodoPagamento
from joalheria.core.exceptions import (
    CarrinhoVazioError,
    DadosInvalidosError,
    EtapaInvalidaError,
    PagamentoFalhouError,
    TempoEsgotadoError,
    CupomInvalidoError,
)

logger = logging.getLogger(__name__)


class EtapaCheckout(IntEnum):
    DADOS_CLIENTE = 1
    ENDERECO = 2
    METODO_PAGAMENTO = 3
    REVISAO = 4
    CONFIRMACAO = 5


CAMPOS_CLIENTE = ('nome', 'email', 'telefone', 'cpf')
CAMPOS_ENDERECO = ('rua', 'numero')
METODOS_VALIDOS = [m.value for m in MetodoPagamento]

# Erros que deixam o checkout recuperável na etapa de revisão
_ERROS_RECUPERAVEIS = (PagamentoFalhouError, TempoEsgotadoError, CupomInvalidoError)


# ====================================================================
# FORMATAÇÃO DE DOCUMENTOS
# ====================================================================

def somente_digitos(valor: Optional[str]) -> str:
    return re.sub(r'\D', '', valor or '')


def formatar_cpf(valor: str) -> str:
    """Formata progressivamente no padrão XXX.XXX.XXX-XX."""
    d = somente_digitos(valor)[:11]
    if len(d) <= 3:
        return d
    if len(d) <= 6:
        return f"{d[:3]}.{d[3:]}"
    if len(d) <= 9:
        return f"{d[:3]}.{d[3:6]}.{d[6:]}"
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def formatar_telefone(valor: str) -> str:
    """Formata progressivamente no padrão (XX) XXXXX-XXXX."""
    d = somente_digitos(valor)[:11]
    if len(d) <= 2:
        return d
    if len(d) <= 7:
        return f"({d[:2]}) {d[2:]}"
    return f"({d[:2]}) {d[2:7]}-{d[7:]}"


def _campos_vazios(dados: Dict[str, Any], campos) -> List[str]:
    return [campo for campo in campos if not str(dados.get(campo) or '').strip()]


# ====================================================================
# SEQUENCIADOR
# ====================================================================

class SequenciadorCheckout:
    """
    Máquina de estados do checkout.

    `criar_pagamento` é o caso de uso que cria o pedido e chama o gateway
    (ver CriarPagamentoUseCase). O estado é serializável via `para_dict()`
    para ser guardado na sessão do usuário.
    """

    def __init__(self, carrinho: CarrinhoStore, criar_pagamento, estado: Optional[Dict[str, Any]] = None):
        self.carrinho = carrinho
        self.criar_pagamento = criar_pagamento

        estado = estado or {}
        self.etapa = EtapaCheckout(estado.get('etapa', EtapaCheckout.DADOS_CLIENTE))
        self.cliente = DadosCliente(**estado.get('cliente', {}))
        self.endereco = Endereco(**estado.get('endereco', {}))
        self.metodo_pagamento: str = estado.get('metodo_pagamento', MetodoPagamento.CARTAO_CREDITO.value)
        self.codigo_cupom: Optional[str] = estado.get('codigo_cupom')
        self.erro: Optional[str] = estado.get('erro')
        self.resultado: Optional[Dict[str, Any]] = estado.get('resultado')

    # ------------------------------------------------------------------
    # Atualização de dados da etapa corrente
    # ------------------------------------------------------------------

    def _exigir_editavel(self):
        if self.etapa == EtapaCheckout.CONFIRMACAO:
            raise EtapaInvalidaError("O checkout já foi concluído.")

    def atualizar_cliente(self, dados: Dict[str, Any]):
        self._exigir_editavel()
        atual = self.cliente.para_dict()
        atual.update({k: str(v).strip() for k, v in dados.items() if k in CAMPOS_CLIENTE and v is not None})
        atual['cpf'] = formatar_cpf(atual['cpf'])
        atual['telefone'] = formatar_telefone(atual['telefone'])
        self.cliente = DadosCliente(**atual)

    def atualizar_endereco(self, dados: Dict[str, Any]):
        self._exigir_editavel()
        atual = self.endereco.para_dict()
        atual.update({k: str(v).strip() for k, v in dados.items() if k in atual and v is not None})
        self.endereco = Endereco(**atual)

    def escolher_metodo(self, metodo: str):
        self._exigir_editavel()
        if metodo not in METODOS_VALIDOS:
            raise DadosInvalidosError(
                f"Método de pagamento inválido: {metodo}.", campos=['metodo_pagamento']
            )
        self.metodo_pagamento = metodo

    def aplicar_cupom(self, codigo: Optional[str]):
        self._exigir_editavel()
        self.codigo_cupom = (codigo or '').strip().upper() or None

    # ------------------------------------------------------------------
    # Transições
    # ------------------------------------------------------------------

    def _validar_guarda(self):
        if self.etapa == EtapaCheckout.DADOS_CLIENTE:
            faltando = _campos_vazios(self.cliente.para_dict(), CAMPOS_CLIENTE)
            if faltando:
                raise DadosInvalidosError("Preencha todos os campos obrigatórios.", campos=faltando)
        elif self.etapa == EtapaCheckout.ENDERECO:
            faltando = _campos_vazios(self.endereco.para_dict(), CAMPOS_ENDERECO)
            if faltando:
                raise DadosInvalidosError("Preencha o endereço de entrega.", campos=faltando)

    def avancar(self, dados_pagamento: Optional[Dict[str, Any]] = None) -> EtapaCheckout:
        """Avança uma etapa. Na revisão, o avanço é o próprio pagamento."""
        if self.etapa == EtapaCheckout.CONFIRMACAO:
            raise EtapaInvalidaError("O checkout já foi concluído.")
        if self.etapa == EtapaCheckout.REVISAO:
            return self.pagar(dados_pagamento)

        self._validar_guarda()
        self.etapa = EtapaCheckout(self.etapa + 1)
        return self.etapa

    def voltar(self) -> EtapaCheckout:
        if self.etapa == EtapaCheckout.CONFIRMACAO:
            raise EtapaInvalidaError("Não é possível voltar após a confirmação.")
        if self.etapa > EtapaCheckout.DADOS_CLIENTE:
            self.etapa = EtapaCheckout(self.etapa - 1)
            self.erro = None
        return self.etapa

    def pagar(self, dados_pagamento: Optional[Dict[str, Any]] = None) -> EtapaCheckout:
        """
        Revisão -> Confirmação.

        Monta a solicitação a partir dos itens selecionados e chama o caso de uso
        de pagamento. Aprovado/pendente: remove os itens selecionados do carrinho
        e conclui. Recusado ou falha do gateway: permanece na revisão com `erro`.
        """
        if self.etapa != EtapaCheckout.REVISAO:
            raise EtapaInvalidaError("O pagamento só pode ser feito na etapa de revisão.")

        itens = self.carrinho.itens_selecionados()
        if not itens:
            raise CarrinhoVazioError()

        self.erro = None
        try:
            pedido, transacao = self.criar_pagamento.executar(
                cliente=self.cliente,
                endereco=self.endereco,
                metodo_pagamento=self.metodo_pagamento,
                itens=itens,
                codigo_cupom=self.codigo_cupom,
                dados_pagamento=dados_pagamento or {},
            )
        except _ERROS_RECUPERAVEIS as e:
            logger.warning("Falha no pagamento do checkout: %s", e.message)
            self.erro = e.message
            return self.etapa

        if not transacao.aceito:
            self.erro = transacao.detalhe or f"Pagamento {transacao.status.value}. Verifique os dados e tente novamente."
            return self.etapa

        self.carrinho.remover_selecionados()
        self.resultado = {
            'pedido_id': pedido.id,
            'status': transacao.status.value,
            'pagamento_id': transacao.referencia_externa,
            'qr_code': transacao.qr_code,
            'qr_code_base64': transacao.qr_code_base64,
            'boleto_url': transacao.boleto_url,
        }
        self.etapa = EtapaCheckout.CONFIRMACAO
        return self.etapa

    def reiniciar(self):
        """Descarta o estado (ex.: após visualizar a confirmação)."""
        self.etapa = EtapaCheckout.DADOS_CLIENTE
        self.cliente = DadosCliente()
        self.endereco = Endereco()
        self.metodo_pagamento = MetodoPagamento.CARTAO_CREDITO.value
        self.codigo_cupom = None
        self.erro = None
        self.resultado = None

    def para_dict(self) -> Dict[str, Any]:
        return {
            'etapa': int(self.etapa),
            'cliente': self.cliente.para_dict(),
            'endereco': self.endereco.para_dict(),
            'metodo_pagamento': self.metodo_pagamento,
            'codigo_cupom': self.codigo_cupom,
            'erro': self.erro,
            'resultado': self.resultado,
        }
