class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    def __init__(self, message="Ocorreu um erro na operação."):
        self.message = message
        super().__init__(self.message)


class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos.", campos=None):
        self.campos = list(campos or [])
        super().__init__(message)

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        super().__init__(message)


class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto específico não é encontrado."""
    def __init__(self, message="O produto solicitado não foi encontrado."):
        super().__init__(message)


class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    def __init__(self, message="O pedido solicitado não foi encontrado."):
        super().__init__(message)


class StatusInvalidoError(BaseErroCore):
    """Erro levantado ao tentar definir um status de pedido inválido."""
    def __init__(self, message="O status fornecido não é válido para um pedido."):
        super().__init__(message)

# ===============================================
# ERROS DE FLUXO DE COMPRA E PAGAMENTO
# ===============================================

class CarrinhoVazioError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout sem itens selecionados."""
    def __init__(self, message="Nenhum item selecionado no carrinho."):
        super().__init__(message)


class EtapaInvalidaError(BaseErroCore):
    """Transição de etapa não permitida no checkout."""
    def __init__(self, message="Transição de etapa inválida."):
        super().__init__(message)


class PagamentoFalhouError(BaseErroCore):
    """Erro levantado quando o Gateway de Pagamento rejeita a transação."""
    def __init__(self, message="A transação de pagamento foi rejeitada ou falhou."):
        super().__init__(message)


class GatewayIndisponivelError(PagamentoFalhouError):
    """O gateway de pagamento não respondeu dentro do prazo."""
    def __init__(self, message="O serviço de pagamento está indisponível. Tente novamente."):
        super().__init__(message)


class CupomInvalidoError(BaseErroCore):
    def __init__(self, message="Cupom inválido ou esgotado."):
        super().__init__(message)


class AutenticacaoFalhouError(BaseErroCore):
    def __init__(self, message="Não foi possível autenticar com o provedor externo."):
        super().__init__(message)

# ===============================================
# ERROS DE ESPERA (POLLING)
# ===============================================

class TempoEsgotadoError(BaseErroCore):
    def __init__(self, message="Tempo de espera esgotado."):
        super().__init__(message)


class EsperaCanceladaError(BaseErroCore):
    def __init__(self, message="Espera cancelada."):
        super().__init__(message)


class ServicoIndisponivelError(BaseErroCore):
    """Um serviço externo (CEP, OAuth) não respondeu."""
    def __init__(self, message="Serviço externo indisponível. Tente novamente."):
        super().__init__(message)
