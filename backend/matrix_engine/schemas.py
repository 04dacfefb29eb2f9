from marshmallow import Schema, ValidationError, fields, post_load, validate, validates_schema

from matrix_engine.utils.matrix_format import parse_matrix
from matrix_engine.utils.sparse_matrix import SparseMatrix


class MatrixSchema(Schema):
    """
    A matrix given either as text in the rows=/cols= format or as explicit
    dimensions plus [row, col, value] entries. Loads into a SparseMatrix.
    """
    text = fields.String()
    rows = fields.Integer(strict=True, validate=validate.Range(min=0))
    cols = fields.Integer(strict=True, validate=validate.Range(min=0))
    entries = fields.List(
        fields.List(fields.Integer(strict=True), validate=validate.Length(equal=3)),
        load_default=list,
    )

    @validates_schema
    def validate_source(self, data, **kwargs):
        has_text = 'text' in data
        has_dimensions = 'rows' in data or 'cols' in data
        if has_text and (has_dimensions or data.get('entries')):
            raise ValidationError("Provide either 'text' or 'rows'/'cols'/'entries', not both")
        if not has_text and not ('rows' in data and 'cols' in data):
            raise ValidationError("Either 'text' or both 'rows' and 'cols' are required")
        for index, (row, col, _) in enumerate(data.get('entries', [])):
            if row < 0 or col < 0:
                raise ValidationError(f"Negative coordinate ({row}, {col})", field_name=f'entries.{index}')

    @post_load
    def make_matrix(self, data, **kwargs):
        if 'text' in data:
            return parse_matrix(data['text'])
        return SparseMatrix.from_entries(data['rows'], data['cols'], data['entries'])


class OperationRequestSchema(Schema):
    left = fields.Nested(MatrixSchema, required=True)
    right = fields.Nested(MatrixSchema, required=True)


class ParseRequestSchema(Schema):
    text = fields.String(required=True)


matrix_schema = MatrixSchema()
operation_request_schema = OperationRequestSchema()
parse_request_schema = ParseRequestSchema()
