# src/chemgpt_core/brain/prompts.py
"""
Deterministic system/user prompt construction per intent.

The generate_structure system prompt negotiates an output contract with the
model: exactly one fenced ```json block with `compound_name` and `smiles`.
Models do not always comply, so the parser never relies on it.
"""

from __future__ import annotations

from chemgpt_core.schema.intent import (
    AnalyzeStructureIntent,
    GeneralChemistryIntent,
    GenerateStructureIntent,
    Intent,
    PredictReactionIntent,
)

STRUCTURE_NAME_KEY = "compound_name"
STRUCTURE_DATA_KEY = "smiles"

BASE_PROMPT = (
    "あなたは専門的な化学知識を持つChemGPTアシスタントです。"
    "化学構造の生成、分析、化学反応の予測を正確に行います。"
)

GENERATE_STRUCTURE_PROMPT = f"""
化合物名から化学構造を生成する際は、以下のルールを厳守してください：

1. 化合物の概要を50-100文字の平文で説明する
2. 構造データは次の形式のコードブロックを「ちょうど1つだけ」出力する
```json
{{"{STRUCTURE_NAME_KEY}": "化合物名", "{STRUCTURE_DATA_KEY}": "SMILES文字列"}}
```
3. コードブロックの外に化学的特徴（分子式、分子量、主要官能基、用途）と安全上の注意を平文で記述する
4. 見出し記号（#）、太字（**）、箇条書き記号、表などのMarkdown装飾は使用しない
5. コードブロック内のキーは "{STRUCTURE_NAME_KEY}" と "{STRUCTURE_DATA_KEY}" の2つのみとする

例：
アスピリン（アセチルサリチル酸）は解熱・鎮痛・抗炎症作用を持つ代表的なNSAIDです。
```json
{{"{STRUCTURE_NAME_KEY}": "アスピリン", "{STRUCTURE_DATA_KEY}": "CC(=O)OC1=CC=CC=C1C(=O)O"}}
```
分子式はC9H8O4、分子量は180.16 g/molです。胃腸障害のリスクがあるため食後の服用が推奨されます。"""

ANALYZE_STRUCTURE_PROMPT = """
化学構造を分析する際は、以下の項目について詳しく説明してください：

1. 構造の概要と化合物名（既知の場合）
2. 分子式と分子量
3. 主要な官能基とその特徴
4. 化学的性質（極性、酸性・塩基性、反応性など）
5. 生物活性や用途（既知の場合）
6. 合成方法や前駆体化合物
7. 安全性情報"""

PREDICT_REACTION_PROMPT = """
化学反応を予測する際は、以下の点を説明してください：

1. 予想される主生成物と副生成物
2. 反応の種類と反応機構の概要
3. 反応条件（温度、溶媒、触媒）が結果に与える影響
4. 収率や選択性に関する注意点
5. 安全上の注意"""

GENERAL_CHEMISTRY_PROMPT = """
化学に関する質問には以下の点を考慮して回答してください：
- 正確な科学的根拠に基づく情報
- 分かりやすい説明と具体例
- 安全性や取り扱い注意点
- 関連する化合物や反応の提示
- 実用的な応用例や背景知識"""

_SYSTEM_PROMPTS: dict[str, str] = {
    "generate_structure": GENERATE_STRUCTURE_PROMPT,
    "analyze_structure": ANALYZE_STRUCTURE_PROMPT,
    "predict_reaction": PREDICT_REACTION_PROMPT,
}


def build_system_prompt(kind: str) -> str:
    return BASE_PROMPT + "\n" + _SYSTEM_PROMPTS.get(kind, GENERAL_CHEMISTRY_PROMPT)


def build_user_prompt(intent: Intent) -> str:
    if isinstance(intent, GenerateStructureIntent):
        return (
            "以下の化合物について、概要と構造データを生成してください：\n\n"
            f"化合物名: {intent.prompt}\n\n"
            "指定された形式に従い、構造データのコードブロックを1つだけ含めてください。"
        )
    if isinstance(intent, AnalyzeStructureIntent):
        return (
            "以下の化学構造について詳細な分析を行ってください：\n\n"
            f"構造データ: {intent.structure}\n"
            f"分析要求: {intent.question}\n\n"
            "構造の特徴、化学的性質、用途、安全性について包括的に分析してください。"
        )
    if isinstance(intent, PredictReactionIntent):
        reactants = "\n".join(f"- {item}" for item in intent.reactants) or "- （未指定）"
        conditions = intent.conditions.strip() or "指定なし"
        return (
            "以下の反応物から生成物を予測してください：\n\n"
            f"反応物:\n{reactants}\n"
            f"反応条件: {conditions}\n\n"
            "予想される生成物と反応機構を説明してください。"
        )
    if isinstance(intent, GeneralChemistryIntent):
        question = intent.question.strip() or "化学に関する一般的な質問"
        parts = [f"以下の化学に関する質問にお答えください：\n\n質問: {question}"]
        if intent.context and intent.context.strip():
            parts.append(f"参考情報: {intent.context.strip()}")
        parts.append("科学的根拠に基づき、分かりやすく詳細な説明をお願いします。")
        return "\n\n".join(parts)
    raise TypeError(f"Unsupported intent: {type(intent).__name__}")
