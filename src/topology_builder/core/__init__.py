"""
Core do Topology Builder.

Reúne as responsabilidades essenciais do laço de reconciliação:
parsing do estado desejado, vocabulário de actions, execução do plano
e persistência do estado reconciliado.

Princípios fundamentais:
    - Nenhuma decisão silenciosa: toda falha aborta a operação corrente
    - Determinismo: mesma entrada ⇒ mesmo modelo, mesma ordem de execução
    - Estado persistido só muda em um commit único ao final do apply
"""
