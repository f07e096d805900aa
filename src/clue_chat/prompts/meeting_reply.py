# Reply for questions about internal meetings (定例 / 会議).
prompt = """最近の内部定例についてお答えします。

2024年度Q1の定例会議では、以下の重要な決定がありました：

**主要な決定事項：**
• 新しい製品コンセプト「Clue.ai」の正式承認
• マーケティング予算を前年比30%増額
• 開発チームの体制を3チーム制に変更

**技術的な決定：**
• React + TypeScriptでのフロントエンド統一
• AIチャット機能の優先実装
• セキュリティ監査の四半期実施

これらの決定により、今四半期の開発方針が明確になりました。特にUI/UXの改善が重要な課題として挙げられています。"""
