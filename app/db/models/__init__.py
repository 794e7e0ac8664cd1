from app.db.models.production import User, ProductionEntry, ProductionDetail, Instruction
