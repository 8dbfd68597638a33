from sqlalchemy import Column, Numeric, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Agent(Base):
    __tablename__ = "agents"

    AGENT_CODE = Column(String(6), primary_key=True)
    AGENT_NAME = Column(String(40))
    WORKING_AREA = Column(String(35))
    COMMISSION = Column(Numeric(10, 2))
    PHONE_NO = Column(String(15))
    COUNTRY = Column(String(25))
