# src/recipeflow/core/__init__.py
"""
Core do RecipeFlow.

Este pacote contém a implementação canônica de receitas de transformação
de dados, independente de notebooks ou frameworks de modelagem.

Componentes principais:
    - config     → carregamento, merge e hashing de configuração
    - recipe     → Recipe, PreparedRecipe, Steps, seletores e schema
    - exceptions → exceções tipadas de prepare/bake
    - errors     → payload canônico de erro

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - Declaração e estado aprendido são tipos distintos
    - prepare e bake são determinísticos
"""
