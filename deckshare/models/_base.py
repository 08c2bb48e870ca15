import sqlmodel


class BaseModel(sqlmodel.SQLModel):
    pass
