# joalheria/core/espera.py
"""
Espera limitada e cancelável (polling com timeout).

Substitui os laços de espera sem limite: toda espera tem um prazo máximo,
pode ser cancelada explicitamente e tem relógio/sono injetáveis para testes.
"""
import logging
import time
from typing import Callable, Optional, TypeVar

from joalheria.core.exceptions import TempoEsgotadoError, EsperaCanceladaError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class EsperaLimitada:

    def __init__(self,
                 timeout: float,
                 intervalo: float = 0.1,
                 relogio: Callable[[], float] = time.monotonic,
                 dormir: Callable[[float], None] = time.sleep):
        if timeout < 0 or intervalo <= 0:
            raise ValueError("timeout deve ser >= 0 e intervalo deve ser > 0.")
        self.timeout = timeout
        self.intervalo = intervalo
        self._relogio = relogio
        self._dormir = dormir
        self._cancelada = False

    @property
    def cancelada(self) -> bool:
        return self._cancelada

    def cancelar(self):
        self._cancelada = True

    def aguardar(self, condicao: Callable[[], Optional[T]]) -> T:
        """
        Avalia `condicao` até que ela retorne um valor verdadeiro, respeitando o prazo.

        Retorna o primeiro valor verdadeiro obtido. Levanta TempoEsgotadoError quando
        o prazo expira e EsperaCanceladaError quando `cancelar()` é chamado.
        """
        limite = self._relogio() + self.timeout
        tentativas = 0

        while True:
            if self._cancelada:
                raise EsperaCanceladaError(f"Espera cancelada após {tentativas} tentativa(s).")

            tentativas += 1
            resultado = condicao()
            if resultado:
                return resultado

            restante = limite - self._relogio()
            if restante <= 0:
                logger.warning("Espera esgotada após %s tentativa(s) (timeout=%ss).", tentativas, self.timeout)
                raise TempoEsgotadoError(f"Tempo de espera de {self.timeout}s esgotado.")

            self._dormir(min(self.intervalo, restante))
