# joalheria/core/rastreamento.py
"""
Rastreamento de pedidos.

O status de rastreamento é sempre derivado do tempo decorrido desde o envio
e recalculado a cada leitura. Apenas o código de rastreio e a data de envio
são gravados no pedido.
"""
import random
import string
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from joalheria.core.entities import Pedido, StatusRastreio

# Dia (inclusive) a partir do qual cada status passa a valer
_FAIXAS = [
    (10, StatusRastreio.ENTREGUE),
    (6, StatusRastreio.FISCALIZACAO),
    (3, StatusRastreio.EM_TRANSITO),
]

_DIA_INICIAL = {
    StatusRastreio.EMBALADO: 0,
    StatusRastreio.EM_TRANSITO: 3,
    StatusRastreio.FISCALIZACAO: 6,
    StatusRastreio.ENTREGUE: 10,
}

DIAS_ATE_ENVIO = 2

_INFO = {
    StatusRastreio.PENDENTE: {
        'label': 'Pendente', 'cor': 'gray', 'descricao': 'Aguardando embalagem',
    },
    StatusRastreio.EMBALADO: {
        'label': 'Embalado', 'cor': 'blue', 'descricao': 'Seu pedido foi embalado e está pronto para envio',
    },
    StatusRastreio.EM_TRANSITO: {
        'label': 'Em Trânsito', 'cor': 'yellow', 'descricao': 'Seu pedido está a caminho do Brasil',
    },
    StatusRastreio.FISCALIZACAO: {
        'label': 'Fiscalização', 'cor': 'orange', 'descricao': 'Seu pedido está passando pela fiscalização aduaneira',
    },
    StatusRastreio.ENTREGUE: {
        'label': 'Entregue', 'cor': 'green', 'descricao': 'Seu pedido foi entregue',
    },
}


def derivar_status_rastreio(enviado_em: datetime, agora: datetime) -> StatusRastreio:
    """Mapeia os dias inteiros decorridos desde o envio para um status."""
    dias = (agora - enviado_em) // timedelta(days=1)
    for dia_inicial, status in _FAIXAS:
        if dias >= dia_inicial:
            return status
    return StatusRastreio.EMBALADO


def status_rastreio_do_pedido(pedido: Pedido, agora: datetime) -> StatusRastreio:
    if pedido.enviado_em is None:
        return StatusRastreio.PENDENTE
    return derivar_status_rastreio(pedido.enviado_em, agora)


def gerar_codigo_rastreio(rng: Optional[random.Random] = None) -> str:
    """Gera um código no formato 1234567A BR."""
    rng = rng or random.SystemRandom()
    digitos = ''.join(rng.choice(string.digits) for _ in range(7))
    letra = rng.choice(string.ascii_uppercase)
    return f"{digitos}{letra} BR"


def data_estimada_envio(data_pagamento: datetime) -> datetime:
    return data_pagamento + timedelta(days=DIAS_ATE_ENVIO)


def info_rastreio(status) -> Dict[str, str]:
    try:
        status = StatusRastreio(status)
    except ValueError:
        status = StatusRastreio.PENDENTE
    return dict(_INFO[status], status=status.value)


def linha_do_tempo(enviado_em: Optional[datetime], agora: datetime) -> List[Dict[str, object]]:
    """Etapas já alcançadas, cada uma com a data prevista de início."""
    if enviado_em is None:
        return []

    atual = derivar_status_rastreio(enviado_em, agora)
    etapas = []
    for status, dia in _DIA_INICIAL.items():
        etapas.append({
            **info_rastreio(status),
            'data': enviado_em + timedelta(days=dia),
        })
        if status == atual:
            break
    return etapas
