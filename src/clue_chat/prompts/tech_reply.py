# Reply for questions about technology and development (技術 / 開発).
prompt = """技術・開発に関する情報をお調べしました。

**現在の技術スタック：**
• フロントエンド: React, TypeScript, Tailwind CSS
• バックエンド: Next.js API Routes
• データベース: PostgreSQL
• インフラ: Vercel

**最新の技術決定：**
• shadcn/uiの採用を見送り、Tailwindのみでの実装
• Server-Sent Eventsを使用したリアルタイム通信
• ローカルストレージでの状態管理

**今後の予定：**
• AIモデルの統合（GPT-4o予定）
• データベース連携の実装
• パフォーマンス最適化"""
