"""Services: Supabase-backed database facade, repositories, domains, money."""
