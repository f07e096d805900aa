# Reply used when no keyword rule matches. {query} is replaced with the user's query verbatim.
prompt_template = """ご質問「{query}」についてお答えします。

申し訳ございませんが、この質問に対する具体的な情報が見つかりませんでした。

**検索のヒント：**
• より具体的なキーワードを使用してください
• 「定例」「会議」「技術」「開発」などの関連語句を含めてみてください
• 時期を指定すると、より正確な情報が得られます

他にご質問がございましたら、お気軽にお聞きください。"""
