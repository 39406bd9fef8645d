"""
异常定义单元测试
"""

from etl_studio.framework.shared.exceptions import (
    ConfigurationError,
    ConflictError,
    EtlStudioError,
    NotFoundError,
    ValidationError,
)


class TestExceptions:
    """自定义异常测试"""

    def test_base_error_defaults(self):
        """测试基础异常默认值"""
        error = EtlStudioError("boom")

        assert str(error) == "boom"
        assert error.error_code == "ETL_STUDIO_ERROR"
        assert error.to_dict() == {
            "error_code": "ETL_STUDIO_ERROR",
            "message": "boom",
            "details": {},
            "cause": None,
        }

    def test_cause_is_stringified(self):
        """测试原因异常被转换为字符串"""
        error = EtlStudioError("wrapped", cause=RuntimeError("inner"))

        assert error.to_dict()["cause"] == "inner"

    def test_not_found(self):
        """测试资源不存在异常"""
        error = NotFoundError("Pipeline not found", resource="pipeline", resource_id=3)

        assert error.error_code == "NOT_FOUND"
        assert error.details == {"resource": "pipeline", "resource_id": 3}

    def test_validation_error_carries_errors(self):
        """测试验证异常携带字段错误"""
        errors = [{"path": ["name"], "message": "Field required", "code": "missing"}]
        error = ValidationError("Invalid pipeline data", errors)

        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors == errors
        assert error.to_dict()["errors"] == errors

    def test_subclasses_share_base(self):
        """测试所有异常都继承基础异常"""
        for error in (
            ConfigurationError("bad", config_key="API_PORT"),
            ConflictError("dup", field="username", value="admin"),
            NotFoundError("missing"),
            ValidationError("invalid"),
        ):
            assert isinstance(error, EtlStudioError)

        assert ConfigurationError("bad", config_key="API_PORT").details == {"config_key": "API_PORT"}
