from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    app_name: str = 'Asset Inventory'
    database_url: str = 'sqlite:///./asset_inventory.db'
    database_echo: bool = False
    log_level: str = 'INFO'
    cors_allow_origins: list[str] = ['*']

    report_url_prefix: str = '/reports'
    code_image_url_prefix: str = '/assets/codes'
    summary_recent_limit: int = 5

    @property
    def database_url_normalized(self) -> str:
        url = self.database_url.strip()
        if url.startswith('postgres://'):
            return 'postgresql+psycopg://' + url[len('postgres://') :]
        if url.startswith('postgresql://'):
            return 'postgresql+psycopg://' + url[len('postgresql://') :]
        return url


settings = Settings()
