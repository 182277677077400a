"""对账报告结构定义

对账结果只在请求时计算，不落库
"""

from pydantic import BaseModel


class Conciliation(BaseModel):
    """地磅净重与流量计累计质量的对账结果"""
    order_number: str
    initial_weight: float
    final_weight: float
    net_weight: float
    accumulated_mass: float
    difference_weight: float
    average_temperature: float
    average_density: float
    average_caudal: float
    classification: str
