from decimal import Decimal

from django.core.management.base import BaseCommand

from joalheria.catalog.models import Produto, ConfiguracaoSite

ANEIS = [
    {
        'nome': "The Curve Ring",
        'descricao': "A beautifully sculpted 14k gold band that elegantly curves around the finger. Perfect for stacking or wearing alone as a statement piece.",
        'preco': Decimal('320.00'),
        'metal': "14k Gold",
        'pedra': "Diamond",
        'imagens': [
            "https://images.unsplash.com/photo-1605100804763-247f67b3557e?q=80&w=800&auto=format&fit=crop",
            "https://images.unsplash.com/photo-1603561591411-07134e71a2a9?q=80&w=800&auto=format&fit=crop",
        ],
    },
    {
        'nome': "The Teardrop Ring",
        'descricao': "Featuring a stunning pear-cut topaz set in polished 14k gold. This ring captures the light from every angle.",
        'preco': Decimal('450.00'),
        'metal': "14k Gold",
        'pedra': "Topaz",
        'imagens': [
            "https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?q=80&w=800&auto=format&fit=crop",
            "https://images.unsplash.com/photo-1598560976315-182f03dfbb83?q=80&w=800&auto=format&fit=crop",
        ],
    },
    {
        'nome': "The Solis Ring",
        'descricao': "Inspired by the sun, this sterling silver band features intricate radial engravings. A modern classic for everyday wear.",
        'preco': Decimal('280.00'),
        'metal': "Silver",
        'pedra': None,
        'imagens': [
            "https://images.unsplash.com/photo-1603561591411-07134e71a2a9?q=80&w=800&auto=format&fit=crop",
            "https://images.unsplash.com/photo-1605100804763-247f67b3557e?q=80&w=800&auto=format&fit=crop",
        ],
    },
    {
        'nome': "The Moody Ring",
        'descricao': "Deep blue sapphire set in a heavy 14k gold band. Bold, sophisticated, and unmistakably unique.",
        'preco': Decimal('380.00'),
        'metal': "14k Gold",
        'pedra': "Sapphire",
        'imagens': [
            "https://images.unsplash.com/photo-1598560976315-182f03dfbb83?q=80&w=800&auto=format&fit=crop",
            "https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?q=80&w=800&auto=format&fit=crop",
        ],
    },
    {
        'nome': "The Duo Ring",
        'descricao': "Two interlocking bands of 14k gold representing connection and balance. Accented with brilliant pavé diamonds.",
        'preco': Decimal('520.00'),
        'metal': "14k Gold",
        'pedra': "Diamond",
        'imagens': [
            "https://images.unsplash.com/photo-1605100804763-247f67b3557e?q=80&w=800&auto=format&fit=crop",
            "https://images.unsplash.com/photo-1603561591411-07134e71a2a9?q=80&w=800&auto=format&fit=crop",
        ],
    },
    {
        'nome': "The Classic Band",
        'descricao': "A minimalist sterling silver band with a high-polish finish. The quintessential foundation for any jewelry collection.",
        'preco': Decimal('150.00'),
        'metal': "Silver",
        'pedra': None,
        'imagens': [
            "https://images.unsplash.com/photo-1603561591411-07134e71a2a9?q=80&w=800&auto=format&fit=crop",
            "https://images.unsplash.com/photo-1598560976315-182f03dfbb83?q=80&w=800&auto=format&fit=crop",
        ],
    },
]

CONFIGURACOES = {
    'hero_title': 'Joias que contam a sua história',
    'hero_subtitle': 'Peças atemporais em ouro, prata e pedras preciosas.',
    'hero_image': 'https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?q=80&w=1600&auto=format&fit=crop',
}


class Command(BaseCommand):
    help = 'Carrega o catálogo inicial quando ainda não há produtos cadastrados'

    def handle(self, *args, **kwargs):
        if Produto.objects.exists():
            self.stdout.write('Catálogo já possui produtos; nada a fazer.')
            return

        self.stdout.write('Criando dados iniciais...')
        for dados in ANEIS:
            produto = Produto.objects.create(tipo="Ring", **dados)
            self.stdout.write(self.style.SUCCESS(f'Criado produto "{produto.nome}"'))

        for chave, valor in CONFIGURACOES.items():
            ConfiguracaoSite.objects.get_or_create(chave=chave, defaults={'valor': valor})

        self.stdout.write(self.style.SUCCESS('Dados iniciais carregados com sucesso!'))
