"""
Core do atlantis-planner.

Este pacote reúne a camada de configuração (`atlantis.yaml`) e o
planner que traduz essa configuração em stages executáveis.

O core é projetado para ser:
    - determinístico
    - sem estado entre chamadas
    - independente do host de VCS e do binário do terraform

Subpacotes:
    - core.config  → leitura, validação e normalização do `atlantis.yaml`
    - core.runtime → planner, Steps e StepMeta
    - core.log     → log estruturado
    - core.errors  → payloads de erro reportáveis ao usuário
"""
