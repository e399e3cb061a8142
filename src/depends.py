from functools import lru_cache

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.logging_messaging import LoggingMailer, LoggingTextMessenger
from src.adapter.services.smtp_mailer import SmtpMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.config import ForgotPasswordConfig
from src.app.services.messaging import IMailer, ITextMessenger
from src.app.services.password_hasher import IPasswordHasher

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache()
def get_forgot_password_config() -> ForgotPasswordConfig:
    return ForgotPasswordConfig.from_application_config(ApplicationConfig)


@lru_cache()
def get_mailer() -> IMailer:
    config = get_forgot_password_config()
    if ApplicationConfig.MAIL_BACKEND == "smtp":
        return SmtpMailer(
            config,
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            sender=ApplicationConfig.MAIL_FROM,
            username=ApplicationConfig.SMTP_USERNAME or None,
            password=ApplicationConfig.SMTP_PASSWORD or None,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
            app_name=ApplicationConfig.APP_NAME,
        )
    return LoggingMailer(config)


@lru_cache()
def get_text_messenger() -> ITextMessenger:
    return LoggingTextMessenger(get_forgot_password_config())


@lru_cache()
def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher(iterations=ApplicationConfig.HASH_ITERATIONS)
