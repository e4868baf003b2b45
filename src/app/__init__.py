"""App: coração do sistema: orquestração, casos de uso e wiring.

Subpastas:
- bootstrap/: composition root (arquivo de canais, factories, inicialização)
- domain/: canais e requisições de relay (tipos imutáveis)
- use_cases/: caso de uso de relay (ordem de validação, sem IO direto)
- services/: credenciais e despacho ao backend
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em log

Padrão: app executa; api adapta; utils apoia.
"""
